# /core/employees.py

import json
from abc import ABC, abstractmethod
from typing import Dict, Optional, Set, Tuple

from core.database import Neo4jEdgeStore


class EmployeeDirectory(ABC):
    """
    The employee-management collaborator as seen by the hierarchy engine.
    The engine only asks whether an id exists and what to call it.
    """
    @abstractmethod
    def exists(self, owner: str, employee_id: str) -> bool:
        pass

    @abstractmethod
    def display_name(self, employee_id: str) -> Optional[str]:
        pass


class InMemoryEmployeeDirectory(EmployeeDirectory):
    def __init__(self):
        self._members: Set[Tuple[str, str]] = set()
        self._names: Dict[str, str] = {}

    def add(self, owner: str, employee_id: str, name: str):
        self._members.add((owner, employee_id))
        self._names[employee_id] = name

    def exists(self, owner: str, employee_id: str) -> bool:
        return (owner, employee_id) in self._members

    def display_name(self, employee_id: str) -> Optional[str]:
        return self._names.get(employee_id)

    @classmethod
    def from_seed_file(cls, path) -> "InMemoryEmployeeDirectory":
        """
        Loads a directory from a JSON list of {"owner", "id", "name"} records,
        the same shape the employee service exports.
        """
        directory = cls()
        with open(path, "r", encoding="utf-8") as f:
            records = json.load(f)
        for record in records:
            directory.add(str(record["owner"]), str(record["id"]), record.get("name") or str(record["id"]))
        return directory


class Neo4jEmployeeDirectory(EmployeeDirectory):
    """Reads :Employee {id, owner, name} nodes maintained by the employee service."""

    def __init__(self, store: Neo4jEdgeStore):
        # Shares the edge store's driver and error mapping.
        self._store = store

    def exists(self, owner: str, employee_id: str) -> bool:
        rows = self._store.execute_query(
            "MATCH (e:Employee {id: $id, owner: $owner}) RETURN count(e) > 0 AS found",
            {"id": employee_id, "owner": owner}
        )
        return bool(rows and rows[0]["found"])

    def display_name(self, employee_id: str) -> Optional[str]:
        rows = self._store.execute_query(
            "MATCH (e:Employee {id: $id}) RETURN e.name AS name LIMIT 1",
            {"id": employee_id}
        )
        return rows[0]["name"] if rows else None
