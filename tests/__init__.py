"""
Test suite for the odtquill package.
"""
