import tempfile
import unittest
from pathlib import Path

from gamecorner.io.persistence import JsonFileKeyValueStore, MemoryKeyValueStore, SnapshotStore


class SnapshotStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = MemoryKeyValueStore()
        self.store = SnapshotStore(self.backend)

    def test_save_and_load(self) -> None:
        self.store.save("hexicon", "2024-01-01", {"found": ["face"], "score": 2})
        self.assertEqual(self.backend.get("hexicon:2024-01-01"), '{"found":["face"],"score":2}')
        self.assertEqual(self.store.load("hexicon", "2024-01-01"), {"found": ["face"], "score": 2})

    def test_unreadable_payloads_are_none(self) -> None:
        self.assertIsNone(self.store.load("hexicon", "missing"))
        self.backend.set("hexicon:bad", "{oops")
        self.assertIsNone(self.store.load("hexicon", "bad"))
        self.backend.set("hexicon:list", "[1, 2]")
        self.assertIsNone(self.store.load("hexicon", "list"))
        self.backend.set("hexicon:blank", "  ")
        self.assertIsNone(self.store.load("hexicon", "blank"))

    def test_clear(self) -> None:
        self.store.save("cryptini", "2024-01-01", {"solved": True})
        self.store.clear("cryptini", "2024-01-01")
        self.assertIsNone(self.store.load("cryptini", "2024-01-01"))
        self.assertEqual(self.backend.keys(), [])

    def test_collection_unlock(self) -> None:
        self.assertFalse(self.store.collection_unlocked("autumn"))
        self.store.unlock_collection("autumn")
        self.assertTrue(self.store.collection_unlocked("autumn"))
        self.assertEqual(self.backend.get("collection:autumn"), "1")


class JsonFileStoreTests(unittest.TestCase):
    def test_one_file_per_key(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            backend = JsonFileKeyValueStore(Path(tmpdir) / "snapshots")
            store = SnapshotStore(backend)
            store.save("letterhead", "2024-01-01", {"guesses": ["RATED"]})

            path = Path(tmpdir) / "snapshots" / "letterhead_2024-01-01.json"
            self.assertTrue(path.exists())
            self.assertEqual(store.load("letterhead", "2024-01-01"), {"guesses": ["RATED"]})

            backend.remove("letterhead:2024-01-01")
            self.assertFalse(path.exists())
            self.assertIsNone(backend.get("letterhead:2024-01-01"))
            backend.remove("letterhead:2024-01-01")


if __name__ == "__main__":
    unittest.main()
