"""
depper Dependency Engine

Provides:
- DependencyGraph: arena of elements with edges derived from the dependency map
- DependenciesBuilder: chainable registration and build()
- DependencyValidator: referential integrity and cycle checks
- TrancheGenerator / Dependencies: layering of a validated graph
"""

from .graph import (
    DependencyGraph,
    Element,
    normalize_dependencies,
)
from .validator import (
    DependencyValidator,
)
from .tranches import (
    Dependencies,
    TrancheGenerator,
    generate_tranches,
)
from .builder import (
    DependenciesBuilder,
)

__all__ = [
    # Graph
    "DependencyGraph",
    "Element",
    "normalize_dependencies",
    # Validator
    "DependencyValidator",
    # Tranches
    "Dependencies",
    "TrancheGenerator",
    "generate_tranches",
    # Builder
    "DependenciesBuilder",
]
