"""
errors/ - Dependency error taxonomy and reporting

Exceptions raised by validation and tranche generation, the structured
issue records they convert to, and the non-raising validation report.
"""

from .taxonomy import (
    ErrorSeverity,
    ErrorCategory,
    ErrorCode,
    DependencyIssue,
    create_missing_dependency_issue,
    create_cyclic_dependency_issue,
    create_inconsistency_issue,
)

from .exceptions import (
    DependencyError,
    MissingDependencyError,
    CyclicDependencyError,
    InternalInconsistencyError,
)

from .aggregator import (
    ValidationReport,
)

__all__ = [
    # Taxonomy
    "ErrorSeverity",
    "ErrorCategory",
    "ErrorCode",
    "DependencyIssue",
    "create_missing_dependency_issue",
    "create_cyclic_dependency_issue",
    "create_inconsistency_issue",
    # Exceptions
    "DependencyError",
    "MissingDependencyError",
    "CyclicDependencyError",
    "InternalInconsistencyError",
    # Aggregator
    "ValidationReport",
]
