"""
errors/aggregator.py - Aggregate validation problems into a report
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Set

from .taxonomy import DependencyIssue, ErrorCode, ErrorSeverity
from .exceptions import CyclicDependencyError, MissingDependencyError


@dataclass
class ValidationReport:
    """Outcome of checking a dependency map without raising."""

    element_count: int = 0

    # Dependent element -> undeclared names
    missing: Dict[str, Set[str]] = field(default_factory=dict)

    # Cycle paths, each starting and ending on the same element
    cycles: List[List[str]] = field(default_factory=list)

    # Set when the cycle check found a cycle but paths were not collected
    cyclic: bool = False

    issues: List[DependencyIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.missing and not self.cyclic

    @property
    def summary(self) -> str:
        if self.missing:
            names = set().union(*self.missing.values())
            return f"{len(names)} missing dependency name(s) referenced by {len(self.missing)} element(s)"
        if self.cyclic:
            if self.cycles:
                return f"{len(self.cycles)} dependency cycle(s) detected"
            return "Dependency cycle detected"
        return f"{self.element_count} element(s) valid"

    def get_by_code(self, code: ErrorCode) -> List[DependencyIssue]:
        """Get issues by code."""
        return [i for i in self.issues if i.code == code]

    def has_critical(self) -> bool:
        """Check if any critical issues."""
        return any(i.severity == ErrorSeverity.CRITICAL for i in self.issues)

    def raise_first(self) -> None:
        """
        Raise the exception for the highest-precedence problem.

        Missing references take precedence over cycles. Does nothing when
        the report is valid.
        """
        if self.missing:
            raise MissingDependencyError(self.missing)
        if self.cyclic:
            raise CyclicDependencyError(self.cycles)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "element_count": self.element_count,
            "missing": {k: sorted(v) for k, v in sorted(self.missing.items())},
            "cycles": [list(c) for c in self.cycles],
            "summary": self.summary,
            "issues": [i.to_dict() for i in self.issues],
        }
