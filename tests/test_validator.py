import unittest
from unittest.mock import MagicMock

import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.employees import InMemoryEmployeeDirectory
from core.errors import CycleError, DuplicateEdgeError, NotFoundError, SelfLinkError, ValidationError
from core.memory_store import InMemoryEdgeStore
from core.models import ReportingEdge
from core.validator import RelationshipValidator

OWNER = "tenant-1"


class TestRelationshipValidator(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryEdgeStore()
        self.directory = InMemoryEmployeeDirectory()
        for employee_id in ["A", "B", "C", "D"]:
            self.directory.add(OWNER, employee_id, f"Employee {employee_id}")
        self.validator = RelationshipValidator(self.store, self.directory)

    def _link(self, senior, junior):
        self.store.insert(ReportingEdge(owner=OWNER, senior=senior, junior=junior))

    def test_valid_link_passes(self):
        self.assertIsNone(self.validator.validate(OWNER, "A", "B"))

    def test_missing_ids_are_rejected_first(self):
        for senior, junior in [("", "B"), ("A", None), (None, None)]:
            with self.assertRaises(ValidationError):
                self.validator.validate(OWNER, senior, junior)

    def test_unknown_employee(self):
        with self.assertRaises(NotFoundError):
            self.validator.validate(OWNER, "A", "Z")

    def test_employee_of_another_tenant_is_unknown(self):
        self.directory.add("tenant-2", "E", "Elsewhere")
        with self.assertRaises(NotFoundError):
            self.validator.validate(OWNER, "A", "E")

    def test_existence_is_checked_before_self_link(self):
        with self.assertRaises(NotFoundError):
            self.validator.validate(OWNER, "Z", "Z")

    def test_self_link(self):
        with self.assertRaises(SelfLinkError):
            self.validator.validate(OWNER, "A", "A")

    def test_duplicate(self):
        self._link("A", "B")
        with self.assertRaises(DuplicateEdgeError):
            self.validator.validate(OWNER, "A", "B")

    def test_direct_reverse_link_is_a_cycle(self):
        self._link("A", "B")
        with self.assertRaises(CycleError):
            self.validator.validate(OWNER, "B", "A")

    def test_transitive_cycle(self):
        # A -> B -> C; linking C over A would close the loop.
        self._link("A", "B")
        self._link("B", "C")
        with self.assertRaises(CycleError):
            self.validator.validate(OWNER, "C", "A")

    def test_second_manager_is_not_a_cycle(self):
        self._link("A", "B")
        self._link("A", "C")
        self.assertIsNone(self.validator.validate(OWNER, "C", "B"))

    def test_validation_never_writes(self):
        mock_store = MagicMock()
        mock_store.exists.return_value = False
        mock_store.count_for_owner.return_value = 0
        mock_store.find_by_junior.return_value = []

        RelationshipValidator(mock_store, self.directory).validate(OWNER, "A", "B")

        mock_store.insert.assert_not_called()


if __name__ == '__main__':
    unittest.main()
