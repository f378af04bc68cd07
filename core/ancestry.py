# /core/ancestry.py

from typing import Iterator, Set

from core.database import EdgeStoreInterface
from core.logger import get_logger
from core.models import AncestryMetadata, ReportingEdge

logger = get_logger(__name__)


class AncestorWalker:
    """
    Walks "who does this employee report to" edges upward from a starting node.
    """
    def __init__(self, store: EdgeStoreInterface):
        self.store = store

    def ancestors_of(self, owner: str, node_id: str) -> Iterator[ReportingEdge]:
        """
        Lazily yields every edge above `node_id`, nearest first.

        Each step fetches the edges whose junior is in the current frontier and
        moves the frontier to their seniors. Nodes are expanded at most once, and
        the walk never takes more than (edges for owner + 1) steps so corrupted
        cyclic data cannot loop forever.
        """
        max_steps = self.store.count_for_owner(owner) + 1
        frontier: Set[str] = {node_id}
        expanded: Set[str] = set()
        steps = 0

        while frontier:
            if steps >= max_steps:
                logger.warning(
                    "Ancestor walk hit its step bound; reporting data may contain a cycle",
                    extra={"owner": owner, "start": node_id, "steps": steps}
                )
                return
            steps += 1
            expanded.update(frontier)

            next_frontier: Set[str] = set()
            for junior in sorted(frontier):
                for edge in self.store.find_by_junior(owner, junior):
                    yield edge
                    if edge.senior not in expanded:
                        next_frontier.add(edge.senior)
            frontier = next_frontier


def derive_metadata(store: EdgeStoreInterface, owner: str, senior_id: str) -> AncestryMetadata:
    """
    Computes level, path and root manager for a new edge out of `senior_id`.

    Only the most recent edge above the senior is consulted, and its stored
    metadata is trusted as-is.
    """
    parents = store.find_by_junior(owner, senior_id)
    if not parents:
        return AncestryMetadata(hierarchy_level=1, path=senior_id, root_manager=senior_id)

    # Store order is oldest first; reversing makes ties resolve to the latest insert.
    parent = max(reversed(parents), key=lambda edge: edge.created_at)
    return AncestryMetadata(
        hierarchy_level=parent.hierarchy_level + 1,
        path=f"{parent.path}.{senior_id}" if parent.path else senior_id,
        root_manager=parent.root_manager or senior_id,
    )
