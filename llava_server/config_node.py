"""
Hierarchical configuration tree.

Each node has a name, an optional string value and an ordered list of child
nodes. Nodes are addressed by dotted keys relative to the node they are
looked up from, e.g. config.get("Server.Port").
"""

from typing import Any, Dict, List, Optional

import yaml

from .text_format import parse_bool, INTEGER_PATTERN

KEY_SEPARATOR = "."


class ConfigNode:
    """A named node in the configuration tree"""

    def __init__(self, name: str, value: Optional[str] = None):
        self.name = name
        self._value = value
        self._children: List["ConfigNode"] = []
        self._missing = False

    @classmethod
    def _missing_node(cls, key: str) -> "ConfigNode":
        node = cls(key)
        node._missing = True
        return node

    # ============================================
    # LOOKUP
    # ============================================

    @property
    def value(self) -> Optional[str]:
        return self._value

    @property
    def children(self) -> List["ConfigNode"]:
        return list(self._children)

    def exists(self) -> bool:
        return not self._missing

    def _child(self, name: str) -> Optional["ConfigNode"]:
        # Duplicate names are allowed; the first one wins
        for child in self._children:
            if child.name == name:
                return child
        return None

    def try_get(self, key: str) -> Optional["ConfigNode"]:
        """Get the node at key, or None if it does not exist"""
        node = self
        for part in key.split(KEY_SEPARATOR):
            node = node._child(part)
            if node is None:
                return None
        return node

    def get(self, key: str) -> "ConfigNode":
        """
        Get the node at key.

        Raises:
            KeyError: If no node exists at key
        """
        node = self.try_get(key)
        if node is None:
            raise KeyError(f"Config node not found: {self.name}{KEY_SEPARATOR}{key}")
        return node

    def __getitem__(self, key: str) -> "ConfigNode":
        # Missing keys yield an empty node so that value_as_default() can be
        # chained without checking for existence first
        node = self.try_get(key)
        if node is None:
            return ConfigNode._missing_node(key)
        return node

    def __contains__(self, key: str) -> bool:
        return self.try_get(key) is not None

    # ============================================
    # MODIFICATION
    # ============================================

    def set(self, key: str, value: Optional[str]) -> "ConfigNode":
        """Set the value at key, creating any intermediate nodes"""
        node = self
        for part in key.split(KEY_SEPARATOR):
            child = node._child(part)
            if child is None:
                child = ConfigNode(part)
                node._children.append(child)
            node = child
        node._value = value
        return node

    def add(self, name: str, value: Optional[str] = None) -> "ConfigNode":
        """Append a child node (even if one with the same name exists)"""
        child = ConfigNode(name, value)
        self._children.append(child)
        return child

    def remove_children(self):
        self._children = []

    # ============================================
    # TYPED ACCESS
    # ============================================

    def value_as(self, value_type: type) -> Any:
        """
        Convert the node's value to bool, int, float or str.

        Raises:
            ValueError: If the node has no value or it cannot be converted
        """
        if self._value is None:
            raise ValueError(f"Config node '{self.name}' has no value")
        if value_type is bool:
            return parse_bool(self._value)
        if value_type is int:
            if not INTEGER_PATTERN.match(self._value):
                raise ValueError(f"Config node '{self.name}' is not an integer: {self._value}")
            return int(self._value)
        if value_type is float:
            return float(self._value)
        if value_type is str:
            return self._value
        raise ValueError(f"Unsupported config value type: {value_type.__name__}")

    def value_as_default(self, value_type: type, default: Any) -> Any:
        """Like value_as(), but returns default if the node is missing or empty"""
        if self._missing or self._value is None:
            return default
        return self.value_as(value_type)

    # ============================================
    # SERIALIZATION
    # ============================================

    def to_dict(self) -> Dict[str, Any]:
        """
        Nested dict of this node's children.

        Nodes holding a value map to that value (their sub-values are not
        included); nodes without one map to a dict of their own children.
        """
        result: Dict[str, Any] = {}
        for child in self._children:
            if child.name in result:
                continue
            if child._value is None and child._children:
                result[child.name] = child.to_dict()
            else:
                result[child.name] = child._value
        return result

    def to_yaml(self) -> str:
        return yaml.safe_dump({self.name: self.to_dict()}, default_flow_style=False, sort_keys=False)

    def __repr__(self) -> str:
        return f"ConfigNode(name={self.name!r}, value={self._value!r}, children={len(self._children)})"
