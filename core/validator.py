# /core/validator.py

from core.ancestry import AncestorWalker
from core.database import EdgeStoreInterface
from core.employees import EmployeeDirectory
from core.errors import CycleError, DuplicateEdgeError, NotFoundError, SelfLinkError, ValidationError


class RelationshipValidator:
    """
    Checks a proposed senior -> junior link against the current graph.
    Read-only: it never writes to the store.
    """
    def __init__(self, store: EdgeStoreInterface, directory: EmployeeDirectory, walker: AncestorWalker = None):
        self.store = store
        self.directory = directory
        self.walker = walker or AncestorWalker(store)

    def validate(self, owner: str, senior_id: str, junior_id: str) -> None:
        """
        Raises the first failing check, in order: missing ids, unknown
        employees, self link, duplicate link, cycle.
        """
        if not senior_id or not junior_id:
            raise ValidationError("Both seniorId and juniorId are required")

        if not (self.directory.exists(owner, senior_id) and self.directory.exists(owner, junior_id)):
            raise NotFoundError("One or both employees not found")

        if senior_id == junior_id:
            raise SelfLinkError("Cannot create relationship with self")

        if self.store.exists(owner, senior_id, junior_id):
            raise DuplicateEdgeError("Relationship already exists")

        if self.would_create_cycle(owner, senior_id, junior_id):
            raise CycleError("This relationship would create a circular reference")

    def would_create_cycle(self, owner: str, senior_id: str, junior_id: str) -> bool:
        """True when junior_id already manages senior_id, directly or transitively."""
        return any(edge.senior == junior_id for edge in self.walker.ancestors_of(owner, senior_id))
