"""
Leaf value resolution for rule expressions.

Handles Identifier, BooleanState and PropAccess lookups against a node.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..dsl_nodes import BooleanState, Identifier, PropAccess, STATE_ACCESSORS
from .coercion import cast_value

if TYPE_CHECKING:
    from ..context import NodeContext


def resolve_identifier(expr: Identifier, node: "NodeContext") -> Any:
    """
    Resolve a bare identifier.

    role -> node.role; widgetType / type -> node.widget_type; anything else
    is a dynamic property (None when the node has no such property).
    """
    name = expr.name
    if name == "role":
        return node.role
    if name in ("widgetType", "type"):
        return node.widget_type
    return node.get_property(name)


def resolve_state(expr: BooleanState, node: "NodeContext") -> bool:
    """
    Read a boolean state keyword.

    States without a context accessor (checked, toggled, is_empty,
    is_not_empty) are always false, as is a state the node does not expose.
    """
    accessor = STATE_ACCESSORS.get(expr.name)
    if accessor is None:
        return False
    return bool(getattr(node, accessor, False))


def resolve_prop(expr: PropAccess, node: "NodeContext") -> Any:
    """
    Resolve prop("name") with its optional suffix.

    .is_resolved asks the node whether the property is resolved; otherwise the
    raw property value is returned, cast when an `as` suffix is present.
    """
    if expr.is_resolved:
        return node.is_property_resolved(expr.name)
    return cast_value(node.get_property(expr.name), expr.as_type)


__all__ = [
    "resolve_identifier",
    "resolve_state",
    "resolve_prop",
]
