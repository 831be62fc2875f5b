"""
errors/taxonomy.py - Dependency error classification

Structured representation of the problems found while validating a
dependency map. Exceptions in exceptions.py convert to these records so
that reports can be aggregated without raising.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories."""
    # Dependency map errors (5xxx)
    DEPENDENCY = "dependency"

    # Internal defects (9xxx)
    INTERNAL = "internal"


class ErrorCode(Enum):
    """Specific error codes."""

    # Dependency (5xxx)
    DEP_INCONSISTENT = 5001
    DEP_MISSING = 5002
    DEP_CYCLIC = 5003


@dataclass
class DependencyIssue:
    """A single problem found in a dependency map."""

    code: ErrorCode = ErrorCode.DEP_MISSING
    category: ErrorCategory = ErrorCategory.DEPENDENCY
    severity: ErrorSeverity = ErrorSeverity.ERROR

    message: str = ""

    # Element the issue is attached to, if any
    element: Optional[str] = None

    # Offending names: missing dependencies or the cycle path
    names: List[str] = field(default_factory=list)

    # Fixing the input makes the map valid; internal defects are not recoverable
    recoverable: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "element": self.element,
            "names": list(self.names),
            "recoverable": self.recoverable,
        }


def create_missing_dependency_issue(element: str, missing: List[str]) -> DependencyIssue:
    """Factory for an element that references undeclared dependencies."""
    names = sorted(missing)
    return DependencyIssue(
        code=ErrorCode.DEP_MISSING,
        category=ErrorCategory.DEPENDENCY,
        severity=ErrorSeverity.ERROR,
        message=f"{element} depends on undeclared {', '.join(names)}",
        element=element,
        names=names,
    )


def create_cyclic_dependency_issue(cycle: List[str]) -> DependencyIssue:
    """Factory for a dependency cycle. The path starts and ends on the same element."""
    return DependencyIssue(
        code=ErrorCode.DEP_CYCLIC,
        category=ErrorCategory.DEPENDENCY,
        severity=ErrorSeverity.ERROR,
        message=f"Cyclic dependency: {' -> '.join(cycle)}",
        element=cycle[0] if cycle else None,
        names=list(cycle),
    )


def create_inconsistency_issue(message: str, remaining: List[str] = None) -> DependencyIssue:
    """Factory for internal inconsistencies."""
    return DependencyIssue(
        code=ErrorCode.DEP_INCONSISTENT,
        category=ErrorCategory.INTERNAL,
        severity=ErrorSeverity.CRITICAL,
        message=message,
        names=list(remaining or []),
        recoverable=False,
    )
