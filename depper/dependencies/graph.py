"""
depper Dependency Graph

Defines the in-memory model of declared elements and their dependencies.

Nodes live in an arena: a dense list of element names plus a name -> index
table. Edges are never stored. They are projected from the dependency map
on demand by build_edges(), so overwriting an element's dependency list
cannot leave stale edges behind.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple
import logging

logger = logging.getLogger(__name__)


# =============================================================================
# ELEMENT
# =============================================================================

@dataclass(frozen=True, eq=False)
class Element:
    """A declared element: a name and the names it depends on."""
    name: str
    dependencies: Tuple[str, ...] = ()

    def __eq__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)


def _check_name(name: Any, what: str) -> None:
    if not isinstance(name, str):
        raise TypeError(f"{what} must be a string, got {type(name).__name__}")
    if not name:
        raise ValueError(f"{what} must be a non-empty string")


def normalize_dependencies(name: str, dependencies: Iterable[str]) -> Tuple[str, ...]:
    """Validate dependency names and drop duplicates, keeping first-seen order."""
    if isinstance(dependencies, str):
        raise TypeError(
            f"Dependencies of {name!r} must be a sequence of names, not a single string"
        )

    seen: Set[str] = set()
    result: List[str] = []
    for dep in dependencies:
        _check_name(dep, f"Dependency of {name!r}")
        if dep not in seen:
            seen.add(dep)
            result.append(dep)
    return tuple(result)


# =============================================================================
# DEPENDENCY GRAPH
# =============================================================================

class DependencyGraph:
    """
    Arena of elements with edges derived from the dependency map.

    An edge A -> B means "A depends on B". It exists only when B is itself
    a declared element. Undeclared names stay in the dependency map so the
    validator can report them.
    """

    def __init__(self):
        self._names: List[str] = []
        self._index: Dict[str, int] = {}
        self._dependencies: Dict[str, Tuple[str, ...]] = {}

    def set_dependencies(self, name: str, dependencies: Iterable[str] = ()) -> Element:
        """
        Record or overwrite the dependency list of an element.

        Re-registering a name replaces its dependency list wholesale and
        keeps its node index.
        """
        _check_name(name, "Element name")
        deps = normalize_dependencies(name, dependencies)

        if name in self._index:
            previous = self._dependencies[name]
            if previous != deps:
                logger.debug(f"Element {name} re-registered: {list(previous)} -> {list(deps)}")
        else:
            self._index[name] = len(self._names)
            self._names.append(name)

        self._dependencies[name] = deps
        return Element(name=name, dependencies=deps)

    # -------------------------------------------------------------------------
    # Node lookup
    # -------------------------------------------------------------------------

    def index_of(self, name: str) -> Optional[int]:
        """Node index of an element, or None if undeclared."""
        return self._index.get(name)

    def name_at(self, index: int) -> str:
        return self._names[index]

    def has_element(self, name: str) -> bool:
        """Check if element is declared."""
        return name in self._index

    def get_element(self, name: str) -> Optional[Element]:
        if name not in self._index:
            return None
        return Element(name=name, dependencies=self._dependencies[name])

    @property
    def elements(self) -> List[str]:
        """Element names in first-registration order."""
        return list(self._names)

    @property
    def element_count(self) -> int:
        return len(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    # -------------------------------------------------------------------------
    # Edge projection
    # -------------------------------------------------------------------------

    def build_edges(self) -> List[Set[int]]:
        """
        Project the dependency map onto a fresh adjacency list.

        Returns:
            edges[i] = node indices element i depends on
        """
        edges: List[Set[int]] = []
        for name in self._names:
            targets = set()
            for dep in self._dependencies[name]:
                dep_index = self._index.get(dep)
                if dep_index is not None:
                    targets.add(dep_index)
            edges.append(targets)
        return edges

    @staticmethod
    def reverse_edges(edges: List[Set[int]]) -> List[Set[int]]:
        """Invert an adjacency list: result[j] = nodes that depend on j."""
        reverse: List[Set[int]] = [set() for _ in edges]
        for source, targets in enumerate(edges):
            for target in targets:
                reverse[target].add(source)
        return reverse

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.build_edges())

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_dependencies(self, name: str) -> Tuple[str, ...]:
        """Declared dependencies of an element (empty if undeclared)."""
        return self._dependencies.get(name, ())

    def get_dependents(self, name: str) -> Set[str]:
        """Elements that directly depend on this element."""
        return {
            element for element in self._names
            if name in self._dependencies[element]
        }

    def get_all_dependencies(self, name: str) -> Set[str]:
        """Get all upstream dependencies (transitive closure)."""
        result = set()
        to_process = [name]

        while to_process:
            current = to_process.pop()
            for dep in self._dependencies.get(current, ()):
                if dep not in result:
                    result.add(dep)
                    to_process.append(dep)

        return result

    def get_all_dependents(self, name: str) -> Set[str]:
        """Get all downstream dependents (transitive closure)."""
        dependents: Dict[str, Set[str]] = {n: set() for n in self._names}
        for element in self._names:
            for dep in self._dependencies[element]:
                if dep in dependents:
                    dependents[dep].add(element)

        result = set()
        to_process = [name]

        while to_process:
            current = to_process.pop()
            for dependent in dependents.get(current, ()):
                if dependent not in result:
                    result.add(dependent)
                    to_process.append(dependent)

        return result

    def dependency_map(self) -> Dict[str, Tuple[str, ...]]:
        """Copy of the name -> dependency list mapping, in registration order."""
        return {name: self._dependencies[name] for name in self._names}

    def copy(self) -> "DependencyGraph":
        """Independent snapshot; later changes to either side are not shared."""
        clone = DependencyGraph()
        clone._names = list(self._names)
        clone._index = dict(self._index)
        clone._dependencies = dict(self._dependencies)
        return clone

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view for debugging and assertions."""
        return {
            "elements": {
                name: {
                    "index": self._index[name],
                    "depends_on": list(self._dependencies[name]),
                }
                for name in self._names
            },
            "edge_count": self.edge_count,
        }
