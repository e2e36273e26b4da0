"""
In-memory NodeContext implementation.

DictNode is a read-only tree node for hosts that can export their UI tree
as plain data (dicts, JSON, YAML). It is also what the test suite sweeps.

Usage:
    root = DictNode.from_yaml('''
        type: Column
        role: group
        children:
          - type: Slider
            role: slider
            focusable: true
            props: {divisions: 20, label: Volume}
    ''')
    for node in iter_tree(root):
        print(node.describe())
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Optional

import yaml

from .context import NodeContext


_FLAG_KEYS = (
    "focusable",
    "enabled",
    "hidden",
    "merges_descendants",
    "has_tap",
    "has_long_press",
)


def iter_tree(root: NodeContext) -> Iterator[NodeContext]:
    """
    Yield `root` and all of its descendants in pre-order.

    Works for any NodeContext; children are read once per node.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node.children)))


class DictNode:
    """
    Immutable tree node backed by plain values.

    Children get their parent link when the parent is constructed, so a tree
    is built bottom-up (or with from_dict) and never re-parented.

    Attributes:
        role: Semantic role ("button", "slider", ...)
        widget_type: Concrete widget type ("ElevatedButton", "Slider", ...)
        props: Dynamic properties (label, tooltip, divisions, ...)
    """

    def __init__(
        self,
        role: str = "",
        widget_type: str = "",
        *,
        focusable: bool = False,
        enabled: bool = True,
        hidden: bool = False,
        merges_descendants: bool = False,
        has_tap: bool = False,
        has_long_press: bool = False,
        props: Optional[Mapping[str, Any]] = None,
        children: Iterable["DictNode"] = (),
    ):
        self._role = role
        self._widget_type = widget_type
        self._focusable = focusable
        self._enabled = enabled
        self._hidden = hidden
        self._merges_descendants = merges_descendants
        self._has_tap = has_tap
        self._has_long_press = has_long_press
        self._props = dict(props or {})
        self._children = tuple(children)
        self._parent: Optional[DictNode] = None
        for child in self._children:
            if child._parent is not None:
                raise ValueError(f"DictNode {child.describe()} already has a parent")
            child._parent = self

    # =========================================================================
    # Identity and state
    # =========================================================================

    @property
    def role(self) -> str:
        return self._role

    @property
    def widget_type(self) -> str:
        return self._widget_type

    @property
    def is_focusable(self) -> bool:
        return self._focusable

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def is_hidden(self) -> bool:
        return self._hidden

    @property
    def merges_descendants(self) -> bool:
        return self._merges_descendants

    @property
    def has_tap(self) -> bool:
        return self._has_tap

    @property
    def has_long_press(self) -> bool:
        return self._has_long_press

    @property
    def props(self) -> Mapping[str, Any]:
        return dict(self._props)

    # =========================================================================
    # Graph
    # =========================================================================

    @property
    def parent(self) -> Optional["DictNode"]:
        return self._parent

    @property
    def root(self) -> "DictNode":
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    @property
    def children(self) -> tuple["DictNode", ...]:
        return self._children

    @property
    def ancestors(self) -> Iterator["DictNode"]:
        """Nearest ancestor first."""
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    @property
    def siblings(self) -> Iterator["DictNode"]:
        """Other children of the parent, in order."""
        if self._parent is None:
            return
        for node in self._parent._children:
            if node is not self:
                yield node

    def _focus_order(self) -> list["DictNode"]:
        return [n for n in iter_tree(self.root) if n is self or n.is_focusable]

    @property
    def next_focus(self) -> Iterator["DictNode"]:
        """Next focusable node in tree pre-order (at most one)."""
        order = self._focus_order()
        index = next(i for i, n in enumerate(order) if n is self)
        if index + 1 < len(order):
            yield order[index + 1]

    @property
    def prev_focus(self) -> Iterator["DictNode"]:
        """Previous focusable node in tree pre-order (at most one)."""
        order = self._focus_order()
        index = next(i for i, n in enumerate(order) if n is self)
        if index > 0:
            yield order[index - 1]

    # =========================================================================
    # Properties
    # =========================================================================

    def get_property(self, name: str) -> Any:
        return self._props.get(name)

    def is_property_resolved(self, name: str) -> bool:
        return self._props.get(name) is not None

    # =========================================================================
    # Construction and display
    # =========================================================================

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DictNode":
        """
        Build a tree from a nested mapping.

        Keys: role, type (or widget_type), the boolean flags, props (mapping)
        and children (list of mappings). Unknown keys are rejected.

        Raises:
            ValueError: On a malformed node.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Node must be a mapping, got {type(data).__name__}")

        allowed = {"role", "type", "widget_type", "props", "children", *_FLAG_KEYS}
        unknown = set(data) - allowed
        if unknown:
            raise ValueError(f"Unknown node keys: {sorted(unknown)}")

        props = data.get("props") or {}
        if not isinstance(props, Mapping):
            raise ValueError("'props' must be a mapping")
        children = data.get("children") or []
        if not isinstance(children, list):
            raise ValueError("'children' must be a list")

        flags = {key: bool(data[key]) for key in _FLAG_KEYS if key in data}
        return cls(
            role=str(data.get("role", "")),
            widget_type=str(data.get("type", data.get("widget_type", ""))),
            props=props,
            children=[cls.from_dict(child) for child in children],
            **flags,
        )

    @classmethod
    def from_yaml(cls, text: str) -> "DictNode":
        """Build a tree from a YAML document (same shape as from_dict)."""
        return cls.from_dict(yaml.safe_load(text))

    def describe(self) -> str:
        """Short label for logs and violations: Type(role)."""
        return f"{self._widget_type or '?'}({self._role or '?'})"

    def __repr__(self) -> str:
        return f"DictNode({self.describe()}, children={len(self._children)})"


__all__ = [
    "DictNode",
    "iter_tree",
]
