"""
depper Dependencies Builder

Collects element registrations and turns them into a validated
Dependencies graph.

Registrations are not validated as they arrive, so elements may be
registered in any order. Registering a name again replaces its dependency
list (last write wins).
"""

from __future__ import annotations
from typing import Iterable, Optional
import logging

from ..config import DepperConfig
from ..errors import ValidationReport
from .graph import DependencyGraph
from .tranches import Dependencies
from .validator import DependencyValidator

logger = logging.getLogger(__name__)


class DependenciesBuilder:
    """
    Fluent builder for a dependency graph.

    Usage:
        dependencies = (
            Dependencies.builder()
            .register("a", ["b", "c"])
            .register("b", ["c"])
            .register("c", [])
            .build()
        )
        dependencies.generate_tranches()  # [["c"], ["b"], ["a"]]
    """

    def __init__(self, config: Optional[DepperConfig] = None):
        self._config = config or DepperConfig.from_env()
        self._graph = DependencyGraph()
        self._validator = DependencyValidator(self._config.validation)

    def register(self, name: str, dependencies: Iterable[str] = ()) -> "DependenciesBuilder":
        """
        Declare an element and the names it depends on.

        Duplicate dependency names are dropped. Nothing is validated until
        build() or check().

        Raises:
            TypeError: name or a dependency is not a string, or the
                dependencies were given as a single string
            ValueError: name or a dependency is empty
        """
        self._graph.set_dependencies(name, dependencies)
        return self

    add_element = register

    @property
    def graph(self) -> DependencyGraph:
        """The graph being built (mutable; build() snapshots it)."""
        return self._graph

    def check(self) -> ValidationReport:
        """Validate the current registrations without raising."""
        return self._validator.check(self._graph)

    def build(self) -> Dependencies:
        """
        Validate the registrations and return a read-only Dependencies graph.

        Raises:
            MissingDependencyError: a dependency name was never registered
            CyclicDependencyError: the dependencies contain a cycle
        """
        self._validator.validate(self._graph)

        snapshot = self._graph.copy()
        logger.info(
            f"Dependencies built: {snapshot.element_count} elements, "
            f"{snapshot.edge_count} edges"
        )
        return Dependencies(snapshot, self._config)

    build_and_validate = build
