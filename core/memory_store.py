# /core/memory_store.py

import threading
from typing import Dict, List, Tuple

from core.database import EdgeStoreInterface
from core.errors import DuplicateEdgeError
from core.models import ReportingEdge


class InMemoryEdgeStore(EdgeStoreInterface):
    """
    Process-local implementation of the EdgeStoreInterface.

    Edges are kept in insertion order under their (owner, senior, junior) key;
    the lock makes the uniqueness check and the write a single step.
    """
    def __init__(self):
        self._edges: Dict[Tuple[str, str, str], ReportingEdge] = {}
        self._lock = threading.Lock()

    def exists(self, owner: str, senior: str, junior: str) -> bool:
        return (owner, senior, junior) in self._edges

    def insert(self, edge: ReportingEdge) -> str:
        key = (edge.owner, edge.senior, edge.junior)
        with self._lock:
            if key in self._edges:
                raise DuplicateEdgeError("Relationship already exists")
            self._edges[key] = edge.model_copy(deep=True)
        return edge.id

    def _select(self, owner: str, **match) -> List[ReportingEdge]:
        with self._lock:
            edges = list(self._edges.values())
        return [
            edge.model_copy(deep=True)
            for edge in edges
            if edge.owner == owner and all(getattr(edge, k) == v for k, v in match.items())
        ]

    def find_by_senior(self, owner: str, senior: str) -> List[ReportingEdge]:
        return self._select(owner, senior=senior)

    def find_by_junior(self, owner: str, junior: str) -> List[ReportingEdge]:
        return self._select(owner, junior=junior)

    def all_for_owner(self, owner: str) -> List[ReportingEdge]:
        return self._select(owner)

    def count_for_owner(self, owner: str) -> int:
        with self._lock:
            return sum(1 for (edge_owner, _, _) in self._edges if edge_owner == owner)
