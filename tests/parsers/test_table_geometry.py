"""
Tests for table layout measurement.
"""

import json

import pytest

from odtquill.exceptions import ParsingError
from odtquill.parser.table_geometry import (
    CellBox,
    StaticLayoutProbe,
    TableBox,
    TableMeasurement,
    measure_table_layout,
    measure_tables,
)


class TestBoxes:
    """Test cases for geometry records."""

    def test_cell_box_from_dict(self):
        assert CellBox.from_dict({"width": 120.5, "colSpan": "3"}) == CellBox(120.5, 3)
        assert CellBox.from_dict({"width": "x", "colSpan": "bad"}) == CellBox(None, 1)
        assert CellBox.from_dict({"width": True, "colSpan": 0}) == CellBox(None, 1)

    @pytest.mark.parametrize("span, expected", [(200000, 1000), (float("inf"), 1), (float("nan"), 1), ("-3", 1)])
    def test_cell_box_span_limits(self, span, expected):
        assert CellBox.from_dict({"colSpan": span}).col_span == expected

    def test_table_box_rows(self):
        box = TableBox.from_dict({
            "width": 300,
            "rows": [
                [{"width": 100}, {"width": 200}],
                {"cells": [{"width": 300, "colSpan": 2}]},
            ],
        })
        assert box.width_px == 300
        assert box.rows[1] == [CellBox(300, 2)]


class TestMeasurement:
    """Test cases for measure_table_layout."""

    def test_widest_value_per_column(self):
        box = TableBox(500, [
            [CellBox(200, 2), CellBox(300)],
            [CellBox(50), CellBox(200), CellBox(250)],
        ])
        measurement = measure_table_layout(box, 1000)
        assert measurement.table_ratio == pytest.approx(0.5)
        assert measurement.column_ratios == pytest.approx([0.1, 0.2, 0.3])

    def test_unmeasured_columns(self):
        box = TableBox(None, [[CellBox(None), CellBox(100)]])
        measurement = measure_table_layout(box, 1000)
        assert measurement.table_ratio is None
        assert measurement.column_ratios[0] is None
        assert measurement.column_ratios[1] == pytest.approx(0.1)

    def test_invalid_content_width(self):
        assert measure_table_layout(TableBox(500, []), 0) == TableMeasurement()

    def test_measure_tables(self):
        probe = StaticLayoutProbe([TableBox(100, []), {"width": 200, "rows": []}])
        ratios = [m.table_ratio for m in measure_tables(probe, 400)]
        assert ratios == pytest.approx([0.25, 0.5])
        assert measure_tables(None, 400) == []


class TestStaticLayoutProbe:
    """Test cases for loading captured geometry."""

    def test_from_json_list(self, temp_dir):
        path = temp_dir / "geometry.json"
        path.write_text(json.dumps([{"width": 400, "rows": [[{"width": 400}]]}]), encoding="utf-8")
        boxes = StaticLayoutProbe.from_json_file(path).table_boxes()
        assert boxes == [TableBox(400, [[CellBox(400, 1)]])]

    def test_from_json_object(self, temp_dir):
        path = temp_dir / "geometry.json"
        path.write_text(json.dumps({"tables": [{"width": 10}, "junk"]}), encoding="utf-8")
        assert len(StaticLayoutProbe.from_json_file(path).table_boxes()) == 1

    @pytest.mark.parametrize("content", ["not json", json.dumps({"tables": 5}), json.dumps(3)])
    def test_invalid_files(self, temp_dir, content):
        path = temp_dir / "geometry.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ParsingError):
            StaticLayoutProbe.from_json_file(path)

    def test_missing_file(self, temp_dir):
        with pytest.raises(ParsingError):
            StaticLayoutProbe.from_json_file(temp_dir / "missing.json")
