"""
depper Dependency Validator

Checks a DependencyGraph before any layering is attempted:

1. Referential integrity: every dependency name must be a declared element.
2. Acyclicity: no element may transitively depend on itself.

Integrity is checked first. Edges to undeclared names are not built, so
running the cycle check on an incomplete map would silently ignore them.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Set
import logging

from ..config import ValidationConfig
from ..errors import (
    CyclicDependencyError,
    MissingDependencyError,
    ValidationReport,
)
from .graph import DependencyGraph

logger = logging.getLogger(__name__)


# DFS node colouring
_UNVISITED = 0
_ON_STACK = 1
_DONE = 2


class DependencyValidator:
    """Validates referential integrity and acyclicity of a dependency graph."""

    def __init__(self, config: Optional[ValidationConfig] = None):
        self.config = config or ValidationConfig()

    def find_missing(self, graph: DependencyGraph) -> Dict[str, Set[str]]:
        """
        Find dependency names that are not declared elements.

        Returns:
            Dependent element -> undeclared names it references
        """
        missing: Dict[str, Set[str]] = {}
        for name in graph.elements:
            undeclared = {d for d in graph.get_dependencies(name) if not graph.has_element(d)}
            if undeclared:
                missing[name] = undeclared
        return missing

    def find_cycles(self, graph: DependencyGraph, limit: Optional[int] = None) -> List[List[str]]:
        """
        Detect cycles using an iterative DFS.

        Each cycle is returned as a path that starts and ends on the same
        element, e.g. ["a", "b", "c", "a"]. A self-dependency is ["a", "a"].

        Args:
            graph: Graph to search
            limit: Stop after this many cycles (default: config.max_reported_cycles)
        """
        if limit is None:
            limit = self.config.max_reported_cycles

        edges = graph.build_edges()
        color = [_UNVISITED] * len(edges)
        cycles: List[List[str]] = []

        for root in range(len(edges)):
            if color[root] != _UNVISITED:
                continue

            color[root] = _ON_STACK
            path = [root]
            pending = [iter(sorted(edges[root]))]

            while pending:
                for dep in pending[-1]:
                    if color[dep] == _UNVISITED:
                        color[dep] = _ON_STACK
                        path.append(dep)
                        pending.append(iter(sorted(edges[dep])))
                        break
                    if color[dep] == _ON_STACK:
                        start = path.index(dep)
                        cycles.append([graph.name_at(i) for i in path[start:]] + [graph.name_at(dep)])
                        if len(cycles) >= limit:
                            return cycles
                else:
                    color[path.pop()] = _DONE
                    pending.pop()

        return cycles

    def check(self, graph: DependencyGraph) -> ValidationReport:
        """Validate without raising; the cycle step is skipped if names are missing."""
        report = ValidationReport(element_count=graph.element_count)

        missing = self.find_missing(graph)
        if missing:
            report.missing = missing
            report.issues = MissingDependencyError(missing).to_issues()
            logger.debug(f"Validation found missing dependencies: {report.summary}")
            return report

        cycles = self.find_cycles(graph, limit=self._cycle_limit())
        if cycles:
            report.cyclic = True
            if self.config.report_cycles:
                report.cycles = cycles
            report.issues = CyclicDependencyError(report.cycles).to_issues()
            logger.debug(f"Validation found cycles: {report.summary}")

        return report

    def validate(self, graph: DependencyGraph) -> None:
        """
        Validate a graph, raising on the first failing check.

        Raises:
            MissingDependencyError: a dependency name is not declared
            CyclicDependencyError: the dependency relation has a cycle
        """
        missing = self.find_missing(graph)
        if missing:
            raise MissingDependencyError(missing)

        cycles = self.find_cycles(graph, limit=self._cycle_limit())
        if cycles:
            raise CyclicDependencyError(cycles if self.config.report_cycles else [])

    def _cycle_limit(self) -> int:
        # One cycle is enough to fail when paths are not reported
        if not self.config.report_cycles:
            return 1
        return self.config.max_reported_cycles
