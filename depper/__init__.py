"""
depper - dependency validation and tranche layering

Detects missing and cyclic dependencies among named elements and sorts
the elements into tranches: groups that can be processed in parallel,
ordered so that every element comes after everything it depends on.

    from depper import Dependencies

    dependencies = (
        Dependencies.builder()
        .register("b", ["d"])
        .register("c", ["d"])
        .register("a", ["d", "e", "y"])
        .register("d", ["e"])
        .register("e", [])
        .register("y", [])
        .build()
    )
    dependencies.generate_tranches()  # [["e", "y"], ["d"], ["b", "c", "a"]]
"""

from .config import (
    DepperConfig,
    TrancheConfig,
    ValidationConfig,
    LoggingConfig,
    load_config,
    get_config,
    reset_config,
)
from .dependencies import (
    Dependencies,
    DependenciesBuilder,
    DependencyGraph,
    DependencyValidator,
    Element,
    TrancheGenerator,
    generate_tranches,
)
from .errors import (
    DependencyError,
    MissingDependencyError,
    CyclicDependencyError,
    InternalInconsistencyError,
    ValidationReport,
)
from .logging_setup import setup_logging, setup_logging_from_config

__version__ = "0.1.0"

__all__ = [
    # Config
    "DepperConfig",
    "TrancheConfig",
    "ValidationConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    "reset_config",
    # Dependencies
    "Dependencies",
    "DependenciesBuilder",
    "DependencyGraph",
    "DependencyValidator",
    "Element",
    "TrancheGenerator",
    "generate_tranches",
    # Errors
    "DependencyError",
    "MissingDependencyError",
    "CyclicDependencyError",
    "InternalInconsistencyError",
    "ValidationReport",
    # Logging
    "setup_logging",
    "setup_logging_from_config",
]
