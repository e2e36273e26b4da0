"""
DSL Selector Nodes.

Selectors decide whether a rule applies to a node. A rule carries one or
more selectors joined with `||`; it applies if ANY of them matches.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnySelector:
    """`any` - matches every node."""

    def __repr__(self) -> str:
        return "any"


@dataclass(frozen=True)
class RoleSelector:
    """`role(name)` - node role equals name."""
    role: str

    def __repr__(self) -> str:
        return f"role({self.role})"


@dataclass(frozen=True)
class TypeSelector:
    """`type(name)` - node widget type equals name."""
    type: str

    def __repr__(self) -> str:
        return f"type({self.type})"


@dataclass(frozen=True)
class KindSelector:
    """`kind(name)` - node role is listed under name in the kind map."""
    kind: str

    def __repr__(self) -> str:
        return f"kind({self.kind})"


Selector = AnySelector | RoleSelector | TypeSelector | KindSelector


__all__ = [
    "AnySelector",
    "RoleSelector",
    "TypeSelector",
    "KindSelector",
    "Selector",
]
