from functools import lru_cache
from pathlib import Path
from typing import Optional

from fastapi import HTTPException, Request

from core.config import settings
from core.database import Neo4jEdgeStore
from core.employees import InMemoryEmployeeDirectory, Neo4jEmployeeDirectory
from core.hierarchy_service import HierarchyService
from core.logger import get_logger
from core.memory_store import InMemoryEdgeStore

logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent


def build_memory_directory() -> InMemoryEmployeeDirectory:
    """Seeds the in-memory employee directory from EMPLOYEE_SEED_FILE, if one is configured."""
    if not settings.EMPLOYEE_SEED_FILE:
        return InMemoryEmployeeDirectory()
    seed_path = Path(settings.EMPLOYEE_SEED_FILE)
    if not seed_path.is_absolute():
        seed_path = PROJECT_ROOT / seed_path
    if not seed_path.exists():
        logger.warning("Employee seed file not found; directory starts empty", extra={"path": str(seed_path)})
        return InMemoryEmployeeDirectory()
    directory = InMemoryEmployeeDirectory.from_seed_file(seed_path)
    logger.info("Loaded employee seed file", extra={"path": str(seed_path)})
    return directory


@lru_cache(maxsize=1)
def get_hierarchy_service() -> HierarchyService:
    """Builds the process-wide service for the configured storage backend."""
    if settings.STORE_BACKEND == "neo4j":
        store = Neo4jEdgeStore()
        directory = Neo4jEmployeeDirectory(store)
    else:
        store = InMemoryEdgeStore()
        directory = build_memory_directory()
    store.ensure_schema()
    logger.info("Hierarchy service ready", extra={"backend": settings.STORE_BACKEND})
    return HierarchyService(store, directory)


def get_owner_id(request: Request) -> str:
    """The tenant id placed on the request by the upstream auth layer."""
    owner: Optional[str] = request.headers.get(settings.OWNER_HEADER)
    if not owner:
        raise HTTPException(status_code=401, detail=f"Missing {settings.OWNER_HEADER} header.")
    return owner
