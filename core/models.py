# /core/models.py

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Shared Pydantic data structures for the hierarchy engine.
# Wire names are camelCase; Python code uses snake_case.


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RelationType(str, Enum):
    """Display label for a reporting link. Carries no structural meaning."""
    MANAGER = "Manager"
    TEAM_LEAD = "Team Lead"
    MENTOR = "Mentor"
    OTHER = "Other"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AncestryMetadata(CamelModel):
    hierarchy_level: int = Field(ge=1, description="Depth of the senior; root-level seniors are level 1.")
    path: str = Field(description="Dot-joined senior ids from the root down to and including the senior.")
    root_manager: str = Field(description="Topmost ancestor above the senior, or the senior itself.")


class ReportingEdge(CamelModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Unique edge identifier.")
    owner: str = Field(description="Tenant the edge belongs to.")
    senior: str = Field(description="Employee id of the manager side.")
    junior: str = Field(description="Employee id of the report side.")
    relation: RelationType = Field(RelationType.MANAGER)
    hierarchy_level: int = Field(1, ge=1)
    path: str = ""
    root_manager: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class EdgeCandidate(CamelModel):
    """A proposed link. Ids are optional so that missing ones surface as MISSING_FIELDS."""
    senior_id: Optional[str] = None
    junior_id: Optional[str] = None
    relation: Optional[str] = None


class InvalidCandidate(CamelModel):
    index: int
    senior_id: Optional[str] = None
    junior_id: Optional[str] = None
    code: str
    reason: str


class HierarchyNode(CamelModel):
    id: str
    name: str
    children: List["HierarchyNode"] = Field(default_factory=list)


class EdgeView(ReportingEdge):
    """A reporting edge with the display names of both ends attached."""
    senior_name: Optional[str] = None
    junior_name: Optional[str] = None


class BulkCreateRequest(CamelModel):
    links: List[EdgeCandidate]


class BulkCreateResponse(CamelModel):
    created: List[ReportingEdge]
    count: int


HierarchyNode.model_rebuild()
