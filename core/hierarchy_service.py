# /core/hierarchy_service.py

from typing import Dict, List, Optional, Union

from core.ancestry import AncestorWalker, derive_metadata
from core.database import EdgeStoreInterface
from core.employees import EmployeeDirectory
from core.errors import (
    BulkInsertError,
    BulkValidationError,
    HierarchyError,
    InternalStoreError,
    InvalidRelationError,
)
from core.logger import get_logger
from core.models import (
    EdgeCandidate,
    EdgeView,
    HierarchyNode,
    InvalidCandidate,
    RelationType,
    ReportingEdge,
    utc_now,
)
from core.validator import RelationshipValidator

logger = get_logger(__name__)


def parse_relation(value: Union[str, RelationType, None]) -> RelationType:
    """Maps an optional label onto the closed relation set, defaulting to Manager."""
    if value is None or value == "":
        return RelationType.MANAGER
    try:
        return RelationType(value)
    except ValueError:
        allowed = ", ".join(r.value for r in RelationType)
        raise InvalidRelationError(f"Unknown relation '{value}'. Allowed: {allowed}")


class HierarchyService:
    """
    Entry point for every hierarchy operation: single and bulk link creation,
    plus the forest, direct-report and management-chain queries.

    The service holds no graph state of its own; everything is read from and
    written to the edge store on each call.
    """
    def __init__(self, store: EdgeStoreInterface, directory: EmployeeDirectory):
        self.store = store
        self.directory = directory
        self.walker = AncestorWalker(store)
        self.validator = RelationshipValidator(store, directory, self.walker)

    # --- Writes ---

    def _check_candidate(self, owner: str, senior_id: Optional[str], junior_id: Optional[str], relation) -> RelationType:
        self.validator.validate(owner, senior_id, junior_id)
        return parse_relation(relation)

    def _build_edge(self, owner: str, senior_id: str, junior_id: str, relation: RelationType) -> ReportingEdge:
        metadata = derive_metadata(self.store, owner, senior_id)
        now = utc_now()
        return ReportingEdge(
            owner=owner,
            senior=senior_id,
            junior=junior_id,
            relation=relation,
            hierarchy_level=metadata.hierarchy_level,
            path=metadata.path,
            root_manager=metadata.root_manager,
            created_at=now,
            updated_at=now,
        )

    def create_relationship(self, owner: str, senior_id: Optional[str], junior_id: Optional[str],
                            relation: Union[str, RelationType, None] = None) -> ReportingEdge:
        try:
            relation_type = self._check_candidate(owner, senior_id, junior_id, relation)
        except InternalStoreError as e:
            logger.error("Store failure while validating reporting link", extra={
                "owner": owner, "senior": senior_id, "junior": junior_id, "error": e.message
            })
            raise
        except HierarchyError as e:
            logger.info("Rejected reporting link", extra={
                "owner": owner, "senior": senior_id, "junior": junior_id, "code": e.code
            })
            raise

        edge = self._build_edge(owner, senior_id, junior_id, relation_type)
        self.store.insert(edge)
        logger.info("Created reporting link", extra={
            "owner": owner, "senior": senior_id, "junior": junior_id, "level": edge.hierarchy_level
        })
        return edge

    def bulk_create_relationships(self, owner: str, candidates: List[EdgeCandidate]) -> List[ReportingEdge]:
        """
        All-or-nothing batch insert.

        Every candidate is validated against the graph as it stood before the
        batch; candidates are not applied to each other first, so two links that
        only form a cycle together both pass. If any candidate fails, the whole
        batch is rejected with one InvalidCandidate per failure and nothing is
        written. A store failure mid-way raises BulkInsertError listing the edges
        that were already committed.
        """
        invalid: List[InvalidCandidate] = []
        relations: List[RelationType] = []
        for index, candidate in enumerate(candidates):
            try:
                relations.append(
                    self._check_candidate(owner, candidate.senior_id, candidate.junior_id, candidate.relation)
                )
            except InternalStoreError as e:
                # An unreachable store is not a property of the candidate.
                logger.error("Store failure while validating reporting link batch", extra={
                    "owner": owner, "index": index, "error": e.message
                })
                raise
            except HierarchyError as e:
                invalid.append(InvalidCandidate(
                    index=index,
                    senior_id=candidate.senior_id,
                    junior_id=candidate.junior_id,
                    code=e.code,
                    reason=e.message,
                ))

        if invalid:
            logger.info("Rejected reporting link batch", extra={
                "owner": owner, "submitted": len(candidates), "invalid": len(invalid)
            })
            raise BulkValidationError(invalid)

        created: List[ReportingEdge] = []
        for index, (candidate, relation_type) in enumerate(zip(candidates, relations)):
            edge = self._build_edge(owner, candidate.senior_id, candidate.junior_id, relation_type)
            try:
                self.store.insert(edge)
            except HierarchyError as e:
                logger.error("Bulk insert failed part-way", extra={
                    "owner": owner, "failed_index": index, "committed": len(created), "code": e.code
                })
                raise BulkInsertError(created, index, e) from e
            created.append(edge)

        logger.info("Created reporting link batch", extra={"owner": owner, "count": len(created)})
        return created

    # --- Queries ---

    def get_direct_reports(self, owner: str, senior_id: str) -> List[ReportingEdge]:
        return self.store.find_by_senior(owner, senior_id)

    def get_management_chain(self, owner: str, junior_id: str) -> List[ReportingEdge]:
        """Every edge above junior_id, nearest manager first."""
        return list(self.walker.ancestors_of(owner, junior_id))

    def get_full_hierarchy(self, owner: str) -> List[HierarchyNode]:
        """
        Builds the tenant's forest. Each employee appears once in the node map
        and is attached by reference under every senior it reports to; roots are
        the employees that are never anyone's junior.
        """
        edges = self.store.all_for_owner(owner)
        nodes: Dict[str, HierarchyNode] = {}

        def node_for(employee_id: str) -> HierarchyNode:
            if employee_id not in nodes:
                name = self.directory.display_name(employee_id) or employee_id
                nodes[employee_id] = HierarchyNode(id=employee_id, name=name)
            return nodes[employee_id]

        for edge in edges:
            senior = node_for(edge.senior)
            junior = node_for(edge.junior)
            senior.children.append(junior)

        junior_ids = {edge.junior for edge in edges}
        return [node for node_id, node in nodes.items() if node_id not in junior_ids]

    def describe(self, edge: ReportingEdge) -> EdgeView:
        """Attaches display names to an edge for presentation."""
        return EdgeView(
            **edge.model_dump(),
            senior_name=self.directory.display_name(edge.senior),
            junior_name=self.directory.display_name(edge.junior),
        )
