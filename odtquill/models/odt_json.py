"""
Import-side node model for ODT JSON.

Wraps the JSON node tree produced by an external ODT parser, where every
node already carries its resolved style properties per property family.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

TEXT_NODE_TYPE = "TEXT"
TEXT_NODE_NAME = "#text"


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass
class OdtNode:
    """One node of the resolved ODT JSON tree."""

    node_type: str = ""
    name: str = ""
    namespace_uri: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)
    text_content: Optional[str] = None
    children: List["OdtNode"] = field(default_factory=list)
    resolved_properties: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "OdtNode":
        """
        Build a node tree from its JSON representation.

        Missing or wrongly typed fields become empty values.

        Args:
            data: Parsed JSON object for the node

        Returns:
            OdtNode with children converted recursively
        """
        if not isinstance(data, dict):
            return cls()

        attributes = data.get("attributes")
        if not isinstance(attributes, dict):
            attributes = {}

        children_data = data.get("children")
        if not isinstance(children_data, list):
            children_data = []

        resolved: Dict[str, Dict[str, Any]] = {}
        application = data.get("styleApplication")
        if isinstance(application, dict):
            properties = application.get("resolvedProperties")
            if isinstance(properties, dict):
                resolved = {
                    key: value
                    for key, value in properties.items()
                    if isinstance(value, dict)
                }

        text_content = data.get("textContent")
        namespace_uri = data.get("namespaceUri")

        return cls(
            node_type=_as_str(data.get("nodeType")),
            name=_as_str(data.get("name")),
            namespace_uri=namespace_uri if isinstance(namespace_uri, str) else None,
            attributes={
                str(key): value
                for key, value in attributes.items()
                if isinstance(value, str)
            },
            text_content=text_content if isinstance(text_content, str) else None,
            children=[cls.from_dict(child) for child in children_data if isinstance(child, dict)],
            resolved_properties=resolved,
        )

    def is_text(self) -> bool:
        return self.node_type == TEXT_NODE_TYPE or self.name == TEXT_NODE_NAME

    def get_resolved_properties(self, family_key: str) -> Dict[str, str]:
        """
        Get resolved properties of one family (e.g. "style:text-properties").

        Only non-empty string values are returned.
        """
        entry = self.resolved_properties.get(family_key)
        if not entry:
            return {}
        return {
            key: value
            for key, value in entry.items()
            if isinstance(value, str) and value != ""
        }

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def find(self, name: str) -> Optional["OdtNode"]:
        """Depth-first search for the first node with the given name."""
        if self.name == name:
            return self
        for child in self.children:
            found = child.find(name)
            if found is not None:
                return found
        return None
