"""
Rule node: the root of a parsed rule.

    rule "<name>" on <selectors> {
        [meta { key: "value" ... }]
        [when: <expr>]
        ensure: <expr>
        report: "<string>"
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from .selectors import Selector
    from .types import Expr


@dataclass(frozen=True)
class Rule:
    """
    A parsed, immutable rule.

    Attributes:
        name: Rule name from the header string
        selectors: Non-empty tuple of selectors (OR semantics)
        ensure: Assertion; the node is compliant iff it evaluates to exactly true
        report: Report text, kept verbatim (no interpolation)
        when: Optional guard; only an exact true result runs the assertion
        meta: Read-only key/value metadata
    """
    name: str
    selectors: tuple["Selector", ...]
    ensure: "Expr"
    report: str
    when: "Expr | None" = None
    meta: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not self.selectors:
            raise ValueError(f"Rule '{self.name}': requires at least 1 selector")
        if self.ensure is None:
            raise ValueError(f"Rule '{self.name}': ensure clause is required")
        object.__setattr__(self, "selectors", tuple(self.selectors))
        object.__setattr__(self, "meta", MappingProxyType(dict(self.meta)))

    def __hash__(self) -> int:
        return hash((self.name, self.selectors, self.ensure, self.report, self.when))

    def __repr__(self) -> str:
        sel = " || ".join(repr(s) for s in self.selectors)
        return f"Rule({self.name!r} on {sel}, when={self.when!r}, ensure={self.ensure!r})"


__all__ = ["Rule"]
