"""
DSL Base Node Types for the accessibility rule language.

This module defines the leaf expression nodes:
- Literal: string, number or boolean constant
- BooleanState: fixed-vocabulary node state keyword (focusable, hidden, ...)
- PropAccess: prop("name") with optional cast or .is_resolved suffix
- Identifier: bare name, resolved against built-ins then node properties
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import BOOLEAN_STATES, CAST_NAMES


# =============================================================================
# Value Nodes
# =============================================================================

@dataclass(frozen=True)
class Literal:
    """
    A literal constant.

    Attributes:
        value: str, int, float or bool

    Examples:
        Literal("button")
        Literal(10)
        Literal(0.75)
        Literal(True)
    """
    value: str | int | float | bool

    def __repr__(self) -> str:
        return f"Literal({self.value!r})"


@dataclass(frozen=True)
class BooleanState:
    """
    A boolean state keyword read from the current node.

    Attributes:
        name: One of BOOLEAN_STATES (focusable, enabled, hidden, ...)
    """
    name: str

    def __post_init__(self):
        if self.name not in BOOLEAN_STATES:
            raise ValueError(
                f"BooleanState: unknown state '{self.name}'. "
                f"Valid states: {sorted(BOOLEAN_STATES)}"
            )

    def __repr__(self) -> str:
        return f"State({self.name})"


@dataclass(frozen=True)
class PropAccess:
    """
    Access to a named node property.

    Attributes:
        name: Property name passed to the context
        as_type: Optional cast target ("int", "string", "bool")
        is_resolved: True for the prop("x").is_resolved presence check

    Examples:
        PropAccess("label")                      # prop("label")
        PropAccess("divisions", as_type="int")   # prop("divisions") as int
        PropAccess("label", is_resolved=True)    # prop("label").is_resolved
    """
    name: str
    as_type: str | None = None
    is_resolved: bool = False

    def __post_init__(self):
        if self.as_type is not None and self.as_type not in CAST_NAMES:
            raise ValueError(
                f"PropAccess: unknown cast '{self.as_type}'. "
                f"Valid casts: {sorted(CAST_NAMES)}"
            )
        if self.as_type is not None and self.is_resolved:
            raise ValueError("PropAccess: cast and is_resolved are mutually exclusive")

    def __repr__(self) -> str:
        if self.is_resolved:
            return f"Prop({self.name!r}).is_resolved"
        if self.as_type:
            return f"Prop({self.name!r} as {self.as_type})"
        return f"Prop({self.name!r})"


@dataclass(frozen=True)
class Identifier:
    """
    A bare identifier.

    `role`, `widgetType` and `type` resolve to built-in node accessors; any
    other name resolves through the node's dynamic properties (None if absent).
    """
    name: str

    def __repr__(self) -> str:
        return f"Ident({self.name})"


__all__ = [
    "Literal",
    "BooleanState",
    "PropAccess",
    "Identifier",
]
