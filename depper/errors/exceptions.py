"""
errors/exceptions.py - Dependency validation exceptions

Raised by the validator and the tranche generator. Each exception can be
converted into DependencyIssue records for aggregated reporting.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Set

from .taxonomy import (
    DependencyIssue,
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
    create_cyclic_dependency_issue,
    create_inconsistency_issue,
    create_missing_dependency_issue,
)


class DependencyError(Exception):
    """Base exception for dependency graph errors."""

    code: ErrorCode = ErrorCode.DEP_INCONSISTENT
    category: ErrorCategory = ErrorCategory.DEPENDENCY
    severity: ErrorSeverity = ErrorSeverity.ERROR

    def to_issues(self) -> List[DependencyIssue]:
        return [DependencyIssue(
            code=self.code,
            category=self.category,
            severity=self.severity,
            message=str(self),
        )]


class MissingDependencyError(DependencyError):
    """
    Raised when elements depend on names that were never registered.

    Attributes:
        missing: Dependent element -> undeclared names it references
    """

    code = ErrorCode.DEP_MISSING

    def __init__(self, missing: Dict[str, Set[str]]):
        self.missing = {element: set(names) for element, names in missing.items()}
        details = "; ".join(
            f"{element} depends on missing {', '.join(sorted(names))}"
            for element, names in sorted(self.missing.items())
        )
        super().__init__(f"Some dependencies do not exist as elements: {details}")

    @property
    def missing_names(self) -> Set[str]:
        """Every undeclared name, regardless of which element referenced it."""
        names: Set[str] = set()
        for referenced in self.missing.values():
            names.update(referenced)
        return names

    def to_issues(self) -> List[DependencyIssue]:
        return [
            create_missing_dependency_issue(element, list(names))
            for element, names in sorted(self.missing.items())
        ]


class CyclicDependencyError(DependencyError):
    """
    Raised when the dependency relation contains a cycle.

    Each cycle is a path that starts and ends on the same element, e.g.
    ["a", "b", "c", "a"]. The list may be empty when cycle reporting is
    disabled in ValidationConfig.
    """

    code = ErrorCode.DEP_CYCLIC

    def __init__(self, cycles: Iterable[List[str]]):
        self.cycles = [list(c) for c in cycles]
        if self.cycles:
            super().__init__(f"Cyclic dependency detected: {' -> '.join(self.cycles[0])}")
        else:
            super().__init__("Cyclic dependency detected")

    @property
    def cycle(self) -> List[str]:
        """First detected cycle."""
        return self.cycles[0] if self.cycles else []

    def to_issues(self) -> List[DependencyIssue]:
        if not self.cycles:
            return super().to_issues()
        return [create_cyclic_dependency_issue(c) for c in self.cycles]


class InternalInconsistencyError(DependencyError):
    """
    Raised when tranche generation meets data validation should have rejected.

    This signals a defect in the library, not a problem with caller input.
    """

    code = ErrorCode.DEP_INCONSISTENT
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.CRITICAL

    def __init__(self, message: str, remaining: Iterable[str] = ()):
        self.remaining = list(remaining)
        super().__init__(message)

    def to_issues(self) -> List[DependencyIssue]:
        return [create_inconsistency_issue(str(self), self.remaining)]
