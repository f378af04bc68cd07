# /core/database.py

from abc import ABC, abstractmethod
from typing import List, Dict, Any

from neo4j import GraphDatabase
from neo4j.exceptions import ConstraintError, DriverError, Neo4jError

from core.config import settings
from core.errors import DuplicateEdgeError, InternalStoreError
from core.logger import get_logger
from core.models import ReportingEdge

logger = get_logger(__name__)

class EdgeStoreInterface(ABC):
    """
    An abstract base class defining the tenant-scoped store of reporting links.
    Every method is scoped by owner; results are ordered oldest first.
    """
    @abstractmethod
    def exists(self, owner: str, senior: str, junior: str) -> bool:
        pass

    @abstractmethod
    def insert(self, edge: ReportingEdge) -> str:
        """Persists the edge and returns its id. Raises DuplicateEdgeError on a uniqueness violation."""
        pass

    @abstractmethod
    def find_by_senior(self, owner: str, senior: str) -> List[ReportingEdge]:
        pass

    @abstractmethod
    def find_by_junior(self, owner: str, junior: str) -> List[ReportingEdge]:
        pass

    @abstractmethod
    def all_for_owner(self, owner: str) -> List[ReportingEdge]:
        pass

    @abstractmethod
    def count_for_owner(self, owner: str) -> int:
        pass

    def ensure_schema(self):
        pass

    def close(self):
        pass


def _native(value):
    # neo4j.time types expose to_native(); plain values pass through.
    return value.to_native() if hasattr(value, "to_native") else value


def record_to_edge(props: Dict[str, Any]) -> ReportingEdge:
    return ReportingEdge(**{key: _native(value) for key, value in props.items()})


class Neo4jEdgeStore(EdgeStoreInterface):
    """
    Concrete implementation of the EdgeStoreInterface for Neo4j.

    Each edge is a standalone :ReportingLink node keyed by (owner, senior, junior);
    traversal works over ids and index lookups rather than graph relationships.
    """
    SCHEMA_STATEMENTS = [
        "CREATE CONSTRAINT reporting_link_unique IF NOT EXISTS "
        "FOR (l:ReportingLink) REQUIRE (l.owner, l.senior, l.junior) IS UNIQUE",
        "CREATE INDEX reporting_link_owner_junior IF NOT EXISTS "
        "FOR (l:ReportingLink) ON (l.owner, l.junior)",
        "CREATE INDEX reporting_link_owner_senior IF NOT EXISTS "
        "FOR (l:ReportingLink) ON (l.owner, l.senior)",
        "CREATE INDEX reporting_link_owner_path IF NOT EXISTS "
        "FOR (l:ReportingLink) ON (l.owner, l.path)",
        "CREATE INDEX reporting_link_owner_root IF NOT EXISTS "
        "FOR (l:ReportingLink) ON (l.owner, l.root_manager)",
        "CREATE INDEX reporting_link_owner_level IF NOT EXISTS "
        "FOR (l:ReportingLink) ON (l.owner, l.hierarchy_level)",
    ]

    def __init__(self, driver=None, database: str = None):
        if driver is None:
            if not settings.NEO4J_URI:
                raise ValueError("NEO4J_URI is not configured.")
            driver = GraphDatabase.driver(
                settings.NEO4J_URI,
                auth=(settings.NEO4J_USERNAME, settings.NEO4J_PASSWORD)
            )
        self._driver = driver
        self._database = database if database is not None else settings.NEO4J_DATABASE

    def _session(self):
        if self._database:
            return self._driver.session(database=self._database)
        return self._driver.session()

    def execute_query(self, query: str, params: Dict = None) -> List[Dict[str, Any]]:
        try:
            with self._session() as session:
                result = session.run(query, params or {})
                return result.data()
        except ConstraintError:
            raise
        except (Neo4jError, DriverError) as e:
            logger.error("Neo4j query failed", extra={"error": str(e)})
            raise InternalStoreError(f"Edge store unavailable: {e}") from e

    def ensure_schema(self):
        for statement in self.SCHEMA_STATEMENTS:
            self.execute_query(statement)
        logger.info("Neo4j reporting link schema ensured.")

    def exists(self, owner: str, senior: str, junior: str) -> bool:
        rows = self.execute_query(
            """
            MATCH (l:ReportingLink {owner: $owner, senior: $senior, junior: $junior})
            RETURN count(l) > 0 AS found
            """,
            {"owner": owner, "senior": senior, "junior": junior}
        )
        return bool(rows and rows[0]["found"])

    def insert(self, edge: ReportingEdge) -> str:
        props = edge.model_dump(mode="python")
        props["relation"] = edge.relation.value
        try:
            self.execute_query("CREATE (l:ReportingLink) SET l = $props", {"props": props})
        except ConstraintError as e:
            raise DuplicateEdgeError("Relationship already exists") from e
        return edge.id

    def _find(self, where: str, params: Dict) -> List[ReportingEdge]:
        rows = self.execute_query(
            f"""
            MATCH (l:ReportingLink)
            WHERE {where}
            RETURN properties(l) AS link
            ORDER BY l.created_at
            """,
            params
        )
        return [record_to_edge(row["link"]) for row in rows]

    def find_by_senior(self, owner: str, senior: str) -> List[ReportingEdge]:
        return self._find("l.owner = $owner AND l.senior = $senior", {"owner": owner, "senior": senior})

    def find_by_junior(self, owner: str, junior: str) -> List[ReportingEdge]:
        return self._find("l.owner = $owner AND l.junior = $junior", {"owner": owner, "junior": junior})

    def all_for_owner(self, owner: str) -> List[ReportingEdge]:
        return self._find("l.owner = $owner", {"owner": owner})

    def count_for_owner(self, owner: str) -> int:
        rows = self.execute_query(
            "MATCH (l:ReportingLink {owner: $owner}) RETURN count(l) AS total",
            {"owner": owner}
        )
        return rows[0]["total"] if rows else 0

    def close(self):
        self._driver.close()
