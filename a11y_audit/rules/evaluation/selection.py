"""
Selector matching: does a rule apply to a node at all?
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Mapping, Sequence

from ..dsl_nodes import AnySelector, KindSelector, RoleSelector, Selector, TypeSelector

if TYPE_CHECKING:
    from ..context import NodeContext


KindMap = Mapping[str, Sequence[str]]

# Conservative default; hosts override it with their own role vocabulary
DEFAULT_KIND_MAP: dict[str, tuple[str, ...]] = {
    "input": ("textField", "slider", "switchRole"),
    "action": ("button", "toggle"),
}


def matches_selector(selector: Selector, node: "NodeContext", kind_map: KindMap) -> bool:
    """
    Test one selector.

    - any: always
    - role(r): node.role == r
    - type(t): node.widget_type == t
    - kind(k): node.role is listed under k in the kind map (unknown kind: no match)
    """
    if isinstance(selector, AnySelector):
        return True
    if isinstance(selector, RoleSelector):
        return selector.role == node.role
    if isinstance(selector, TypeSelector):
        return selector.type == node.widget_type
    if isinstance(selector, KindSelector):
        return node.role in kind_map.get(selector.kind, ())
    raise TypeError(f"Unknown selector type: {type(selector).__name__}")


def matches_selectors(selectors: Iterable[Selector], node: "NodeContext", kind_map: KindMap) -> bool:
    """True if ANY selector matches the node."""
    return any(matches_selector(s, node, kind_map) for s in selectors)


__all__ = [
    "KindMap",
    "DEFAULT_KIND_MAP",
    "matches_selector",
    "matches_selectors",
]
