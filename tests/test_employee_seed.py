import json
import os
import tempfile
import unittest
from unittest.mock import patch

import sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from api.dependencies import build_memory_directory
from core.config import settings
from core.employees import InMemoryEmployeeDirectory


class TestEmployeeSeed(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.seed_path = os.path.join(self.tmp.name, "employees.json")
        with open(self.seed_path, "w", encoding="utf-8") as f:
            json.dump([
                {"owner": "acme", "id": "e1", "name": "Grace Hopper"},
                {"owner": "acme", "id": "e2"},
            ], f)

    def tearDown(self):
        self.tmp.cleanup()

    def test_from_seed_file(self):
        directory = InMemoryEmployeeDirectory.from_seed_file(self.seed_path)

        self.assertTrue(directory.exists("acme", "e1"))
        self.assertFalse(directory.exists("other", "e1"))
        self.assertEqual(directory.display_name("e1"), "Grace Hopper")
        # Records without a name fall back to the id
        self.assertEqual(directory.display_name("e2"), "e2")

    def test_build_uses_configured_file(self):
        with patch.object(settings, "EMPLOYEE_SEED_FILE", self.seed_path):
            directory = build_memory_directory()

        self.assertTrue(directory.exists("acme", "e2"))

    def test_default_seed_file_ships_with_the_project(self):
        with patch.object(settings, "EMPLOYEE_SEED_FILE", "employees.seed.json"):
            directory = build_memory_directory()

        self.assertTrue(directory.exists("demo-tenant", "A"))
        self.assertEqual(directory.display_name("A"), "Ayesha Khan")

    def test_missing_file_leaves_directory_empty(self):
        missing = os.path.join(self.tmp.name, "nope.json")
        with patch.object(settings, "EMPLOYEE_SEED_FILE", missing):
            with self.assertLogs("api.dependencies", level="WARNING"):
                directory = build_memory_directory()

        self.assertFalse(directory.exists("acme", "e1"))

    def test_unset_seed_file(self):
        with patch.object(settings, "EMPLOYEE_SEED_FILE", None):
            directory = build_memory_directory()

        self.assertFalse(directory.exists("demo-tenant", "A"))


if __name__ == '__main__':
    unittest.main()
