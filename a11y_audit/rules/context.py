"""
NodeContext: the read-only view of one tree node the evaluator works against.

The engine never sees a concrete UI framework. Hosts adapt their own node
type to this protocol (see tree_context.DictNode for an in-memory one).

Contract:
- Boolean accessors return plain bools.
- children / ancestors / siblings return iterables of NodeContext; each may
  be consumed once per evaluation and may be lazy.
- next_focus / prev_focus are optional: a context without them is treated
  as having no focus neighbours.
- get_property returns None for an unknown or unresolved property.
- Contexts are never mutated by evaluation.
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol, runtime_checkable


@runtime_checkable
class NodeContext(Protocol):
    """Read-only node interface consumed by the rule interpreter."""

    @property
    def role(self) -> str: ...

    @property
    def widget_type(self) -> str: ...

    @property
    def is_focusable(self) -> bool: ...

    @property
    def is_enabled(self) -> bool: ...

    @property
    def is_hidden(self) -> bool: ...

    @property
    def merges_descendants(self) -> bool: ...

    @property
    def has_tap(self) -> bool: ...

    @property
    def has_long_press(self) -> bool: ...

    @property
    def children(self) -> Iterable["NodeContext"]: ...

    @property
    def ancestors(self) -> Iterable["NodeContext"]: ...

    @property
    def siblings(self) -> Iterable["NodeContext"]: ...

    def get_property(self, name: str) -> Any: ...

    def is_property_resolved(self, name: str) -> bool: ...


__all__ = ["NodeContext"]
