"""
depper Tranche Generation

Partitions a validated dependency graph into tranches: ordered groups of
elements where every element's dependencies lie in earlier tranches and
elements inside one tranche are independent of each other.

The generator is a layered Kahn's algorithm. Each pass takes every node
whose dependencies have all been placed, emits the whole frontier as one
tranche, and decrements the outstanding-dependency counters of the nodes
that depend on it.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set, Tuple
import logging

from ..config import DepperConfig, TrancheConfig
from ..errors import InternalInconsistencyError
from .graph import DependencyGraph

if TYPE_CHECKING:
    from .builder import DependenciesBuilder

logger = logging.getLogger(__name__)


class TrancheGenerator:
    """Computes tranches from a dependency graph."""

    def __init__(self, config: Optional[TrancheConfig] = None):
        self.config = config or TrancheConfig()

    def generate(self, graph: DependencyGraph) -> List[List[str]]:
        """
        Compute tranches for a graph that has passed validation.

        Raises:
            InternalInconsistencyError: nodes remain but none is free of
                unplaced dependencies (the graph is cyclic)
        """
        edges = graph.build_edges()
        dependents = DependencyGraph.reverse_edges(edges)
        outstanding = [len(targets) for targets in edges]

        frontier = [i for i, count in enumerate(outstanding) if count == 0]
        tranches: List[List[str]] = []
        placed = 0

        # Every pass places at least one node, so node count bounds the loop
        for _ in range(len(edges)):
            if not frontier:
                break

            tranches.append(self._order(graph, frontier))
            placed += len(frontier)
            logger.debug(f"Tranche {len(tranches) - 1}: {tranches[-1]}")

            next_frontier = []
            for node in frontier:
                for dependent in dependents[node]:
                    outstanding[dependent] -= 1
                    if outstanding[dependent] == 0:
                        next_frontier.append(dependent)
            frontier = next_frontier

        if placed != len(edges):
            remaining = [graph.name_at(i) for i, count in enumerate(outstanding) if count > 0]
            logger.error(
                f"Tranche generation stalled with {len(remaining)} unplaced element(s): {remaining}"
            )
            raise InternalInconsistencyError(
                "Tranche generation found no element free of dependencies; "
                "the graph should have been rejected by validation",
                remaining=remaining,
            )

        return tranches

    def _order(self, graph: DependencyGraph, nodes: List[int]) -> List[str]:
        if self.config.ordering == "alphabetical":
            return sorted(graph.name_at(i) for i in nodes)
        return [graph.name_at(i) for i in sorted(nodes)]


class Dependencies:
    """
    A validated, read-only dependency graph.

    Instances are produced by DependenciesBuilder.build(). They hold their
    own snapshot of the dependency map, so registrations made on the builder
    afterwards do not affect them.
    """

    def __init__(self, graph: DependencyGraph, config: Optional[DepperConfig] = None):
        self._graph = graph
        self._config = config or DepperConfig.from_env()

    @classmethod
    def builder(cls, config: Optional[DepperConfig] = None) -> "DependenciesBuilder":
        """Start registering elements."""
        from .builder import DependenciesBuilder
        return DependenciesBuilder(config)

    def generate_tranches(self) -> List[List[str]]:
        """Compute tranches; recomputed from the dependency map on every call."""
        return TrancheGenerator(self._config.tranches).generate(self._graph)

    def tranche_index(self) -> Dict[str, int]:
        """Element name -> index of the tranche it is placed in."""
        return {
            name: depth
            for depth, tranche in enumerate(self.generate_tranches())
            for name in tranche
        }

    def tranche_of(self, name: str) -> int:
        """Index of the tranche an element is placed in."""
        if not self._graph.has_element(name):
            raise KeyError(name)
        return self.tranche_index()[name]

    @property
    def elements(self) -> List[str]:
        return self._graph.elements

    def get_dependencies(self, name: str) -> Tuple[str, ...]:
        return self._graph.get_dependencies(name)

    def get_dependents(self, name: str) -> Set[str]:
        return self._graph.get_dependents(name)

    def get_all_dependencies(self, name: str) -> Set[str]:
        return self._graph.get_all_dependencies(name)

    def get_all_dependents(self, name: str) -> Set[str]:
        return self._graph.get_all_dependents(name)

    def dependency_map(self) -> Dict[str, Tuple[str, ...]]:
        return self._graph.dependency_map()

    def __len__(self) -> int:
        return len(self._graph)

    def __contains__(self, name: object) -> bool:
        return name in self._graph

    def __repr__(self) -> str:
        return f"Dependencies(elements={len(self._graph)}, edges={self._graph.edge_count})"

    def to_dict(self) -> Dict[str, Any]:
        data = self._graph.to_dict()
        data["tranches"] = self.generate_tranches()
        return data


def generate_tranches(dependencies: Dependencies) -> List[List[str]]:
    """Compute the tranches of a validated graph."""
    return dependencies.generate_tranches()
