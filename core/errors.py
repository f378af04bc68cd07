# /core/errors.py

from typing import List, Optional


class HierarchyError(Exception):
    """Base class for every rejection raised by the hierarchy engine."""
    code = "INTERNAL"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(HierarchyError):
    code = "MISSING_FIELDS"


class InvalidRelationError(ValidationError):
    code = "INVALID_RELATION"


class NotFoundError(HierarchyError):
    code = "NOT_FOUND"


class SelfLinkError(HierarchyError):
    code = "SELF_LINK"


class DuplicateEdgeError(HierarchyError):
    code = "DUPLICATE"


class CycleError(HierarchyError):
    code = "CYCLE"


class InternalStoreError(HierarchyError):
    """Raised when the backing store fails in a way validation could not foresee."""
    code = "INTERNAL"


class BulkValidationError(HierarchyError):
    """
    One or more candidates of a batch failed validation. Nothing was written.

    `invalid` holds one InvalidCandidate per offending candidate, in batch order.
    """
    code = "INVALID_BATCH"

    def __init__(self, invalid: List["InvalidCandidate"]):
        super().__init__(f"{len(invalid)} of the submitted links are invalid")
        self.invalid = invalid


class BulkInsertError(InternalStoreError):
    """
    The store rejected a write part-way through a validated batch.

    `created` lists the edges that were committed before `failed_index` was reached.
    """

    def __init__(self, created: list, failed_index: int, cause: HierarchyError):
        super().__init__(
            f"Bulk insert stopped at link {failed_index} after committing "
            f"{len(created)} link(s): {cause.message}"
        )
        self.created = created
        self.failed_index = failed_index
        self.cause = cause
        self.cause_code: Optional[str] = cause.code
