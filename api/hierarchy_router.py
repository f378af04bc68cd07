from fastapi import APIRouter, Depends, HTTPException
from typing import List

from api.dependencies import get_hierarchy_service, get_owner_id
from core.errors import (
    BulkInsertError,
    BulkValidationError,
    HierarchyError,
    InternalStoreError,
    NotFoundError,
)
from core.hierarchy_service import HierarchyService
from core.logger import get_logger
from core.models import (
    BulkCreateRequest,
    BulkCreateResponse,
    EdgeCandidate,
    EdgeView,
    HierarchyNode,
    ReportingEdge,
)

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/hierarchy",
    tags=["Hierarchy"]
)


def _raise_http(error: HierarchyError):
    """Translates an engine error into the matching HTTP response."""
    if isinstance(error, BulkValidationError):
        raise HTTPException(status_code=400, detail={
            "code": error.code,
            "message": error.message,
            "invalid": [item.model_dump(by_alias=True) for item in error.invalid],
        })
    if isinstance(error, BulkInsertError):
        raise HTTPException(status_code=500, detail={
            "code": error.code,
            "message": error.message,
            "committed": len(error.created),
            "createdIds": [edge.id for edge in error.created],
            "failedIndex": error.failed_index,
        })
    if isinstance(error, InternalStoreError):
        logger.error("Hierarchy store failure", extra={"error": error.message})
        raise HTTPException(status_code=500, detail={"code": error.code, "message": error.message})
    status_code = 404 if isinstance(error, NotFoundError) else 400
    raise HTTPException(status_code=status_code, detail={"code": error.code, "message": error.message})


# --- API Endpoints ---

@router.post("/create", response_model=ReportingEdge, status_code=201)
def create_relationship(
    candidate: EdgeCandidate,
    owner: str = Depends(get_owner_id),
    service: HierarchyService = Depends(get_hierarchy_service),
):
    """Links a senior to a junior employee."""
    try:
        return service.create_relationship(owner, candidate.senior_id, candidate.junior_id, candidate.relation)
    except HierarchyError as e:
        _raise_http(e)


@router.post("/bulkCreate", response_model=BulkCreateResponse, status_code=201)
def bulk_create_relationships(
    request: BulkCreateRequest,
    owner: str = Depends(get_owner_id),
    service: HierarchyService = Depends(get_hierarchy_service),
):
    """Creates every submitted link, or none of them if any is invalid."""
    try:
        created = service.bulk_create_relationships(owner, request.links)
    except HierarchyError as e:
        _raise_http(e)
    return BulkCreateResponse(created=created, count=len(created))


@router.get("", response_model=List[HierarchyNode])
def get_full_hierarchy(
    owner: str = Depends(get_owner_id),
    service: HierarchyService = Depends(get_hierarchy_service),
):
    """Returns the tenant's reporting forest."""
    try:
        return service.get_full_hierarchy(owner)
    except HierarchyError as e:
        _raise_http(e)


@router.get("/directReports/{employee_id}", response_model=List[EdgeView])
def get_direct_reports(
    employee_id: str,
    owner: str = Depends(get_owner_id),
    service: HierarchyService = Depends(get_hierarchy_service),
):
    try:
        return [service.describe(edge) for edge in service.get_direct_reports(owner, employee_id)]
    except HierarchyError as e:
        _raise_http(e)


@router.get("/managementChain/{employee_id}", response_model=List[EdgeView])
def get_management_chain(
    employee_id: str,
    owner: str = Depends(get_owner_id),
    service: HierarchyService = Depends(get_hierarchy_service),
):
    """Managers above the employee, nearest first."""
    try:
        return [service.describe(edge) for edge in service.get_management_chain(owner, employee_id)]
    except HierarchyError as e:
        _raise_http(e)
