import threading
import unittest

import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.errors import DuplicateEdgeError
from core.memory_store import InMemoryEdgeStore
from core.models import ReportingEdge


class TestInMemoryEdgeStore(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryEdgeStore()

    def test_uniqueness_is_per_owner(self):
        self.store.insert(ReportingEdge(owner="t1", senior="A", junior="B"))
        self.store.insert(ReportingEdge(owner="t2", senior="A", junior="B"))

        with self.assertRaises(DuplicateEdgeError):
            self.store.insert(ReportingEdge(owner="t1", senior="A", junior="B"))

        self.assertEqual(self.store.count_for_owner("t1"), 1)
        self.assertEqual(self.store.count_for_owner("t2"), 1)

    def test_lookups_are_scoped_and_ordered(self):
        for senior, junior in [("A", "B"), ("A", "C"), ("B", "C")]:
            self.store.insert(ReportingEdge(owner="t1", senior=senior, junior=junior))
        self.store.insert(ReportingEdge(owner="t2", senior="A", junior="D"))

        self.assertEqual([e.junior for e in self.store.find_by_senior("t1", "A")], ["B", "C"])
        self.assertEqual([e.senior for e in self.store.find_by_junior("t1", "C")], ["A", "B"])
        self.assertEqual(len(self.store.all_for_owner("t1")), 3)
        self.assertFalse(self.store.exists("t2", "A", "B"))

    def test_returned_edges_are_copies(self):
        self.store.insert(ReportingEdge(owner="t1", senior="A", junior="B"))

        self.store.find_by_senior("t1", "A")[0].path = "tampered"

        self.assertEqual(self.store.find_by_senior("t1", "A")[0].path, "")

    def test_concurrent_inserts_of_the_same_pair(self):
        outcomes = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            try:
                self.store.insert(ReportingEdge(owner="t1", senior="A", junior="B"))
                outcomes.append("ok")
            except DuplicateEdgeError:
                outcomes.append("duplicate")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(outcomes.count("ok"), 1)
        self.assertEqual(outcomes.count("duplicate"), 7)
        self.assertEqual(self.store.count_for_owner("t1"), 1)


if __name__ == '__main__':
    unittest.main()
