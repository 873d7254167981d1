import json
import tempfile
import unittest
from datetime import date
from pathlib import Path

from gamecorner.core.constants import Game
from gamecorner.core.exceptions import PuzzleNotFoundError
from gamecorner.engine.sessions import SessionFactory
from gamecorner.io.dates import FixedDateProvider
from gamecorner.io.loader import DirectoryPuzzleSource, PuzzleLoader
from gamecorner.io.persistence import MemoryKeyValueStore, SnapshotStore


DAY = date(2024, 1, 1)


def write(root: Path, relative: str, payload) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    text = payload if isinstance(payload, str) else json.dumps(payload)
    path.write_text(text, encoding="utf-8")


class SessionFactoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        write(
            self.root,
            "hexicon/2024-01-01.json",
            {"pangram": "abcdefg", "letters": list("abcdefg"), "required": "a", "words": ["face", "abcdefg"]},
        )
        write(self.root, "letterhead/2024-01-01.json", {"answer": "crane"})
        write(self.root, "letterhead/special/party.json", {"answer": "party"})
        write(self.root, "cryptini/2024-01-01.json", {"clue": "c", "answer": "mixup", "hints": ["h1"]})
        self.backend = MemoryKeyValueStore()
        self.snapshots = SnapshotStore(self.backend)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def factory(self) -> SessionFactory:
        return SessionFactory(
            PuzzleLoader(DirectoryPuzzleSource(self.root)), self.snapshots, FixedDateProvider(DAY)
        )

    def test_accepted_actions_are_persisted(self) -> None:
        session = self.factory().open_hexicon()
        self.assertFalse(session.restored)
        self.assertFalse(session.run(session.engine.submit_word, "zzzz").accepted)
        self.assertEqual(self.backend.keys(), [])

        self.assertTrue(session.run(session.engine.submit_word, "face").accepted)
        stored = self.snapshots.load("hexicon", "2024-01-01")
        assert stored is not None
        self.assertEqual(stored["found"], ["face"])

        reopened = self.factory().open_hexicon()
        self.assertTrue(reopened.restored)
        self.assertEqual(reopened.engine.score, 2)

    def test_reset_clears_storage(self) -> None:
        session = self.factory().open_cryptini()
        session.run(session.engine.reveal_hint)
        self.assertIsNotNone(self.snapshots.load("cryptini", "2024-01-01"))
        session.reset()
        self.assertIsNone(self.snapshots.load("cryptini", "2024-01-01"))
        self.assertEqual(session.engine.hints_revealed, 0)

    def test_missing_documents_raise(self) -> None:
        with self.assertRaises(PuzzleNotFoundError):
            self.factory().open_mini()
        with self.assertRaises(PuzzleNotFoundError):
            self.factory().open_hexicon(date(2024, 1, 2))

    def test_letterhead_needs_allowed_guesses(self) -> None:
        with self.assertRaises(PuzzleNotFoundError):
            self.factory().open_letterhead()

        write(self.root, "letterhead/allowed.txt", "rated\ncrane\n")
        session = self.factory().open_letterhead()
        for char in "rated":
            session.engine.type_char(char)
        self.assertTrue(session.run(session.engine.submit).accepted)
        stored = self.snapshots.load("letterhead", "2024-01-01")
        assert stored is not None
        self.assertEqual(stored["guesses"], ["RATED"])

    def test_input_actions_are_persisted(self) -> None:
        write(self.root, "letterhead/allowed.txt", "rated\ncrane\n")
        session = self.factory().open_letterhead()
        self.assertTrue(session.run(session.engine.type_char, "c").accepted)
        self.assertIsNotNone(self.snapshots.load("letterhead", "2024-01-01"))
        self.assertFalse(session.run(session.engine.type_char, "é").accepted)

    def test_malformed_letterhead_snapshot_opens_fresh(self) -> None:
        write(self.root, "letterhead/allowed.txt", "rated\ncrane\n")
        self.snapshots.save("letterhead", "2024-01-01", {"guesses": ["ÉCLAT"], "letterhead": "CRANE"})
        session = self.factory().open_letterhead()
        self.assertEqual(session.engine.guesses(), [])
        self.assertTrue(session.engine.is_playing)

    def test_malformed_hexicon_snapshot_opens_fresh(self) -> None:
        self.snapshots.save("hexicon", "2024-01-01", {"pangram": "abcdefg", "required": "a", "found": 5})
        session = self.factory().open_hexicon()
        self.assertFalse(session.restored)
        self.assertEqual(session.engine.score, 0)

    def test_restore_errors_reset_the_engine(self) -> None:
        class BrokenEngine:
            def __init__(self) -> None:
                self.was_reset = False

            def restore(self, snapshot):
                raise TypeError("bad snapshot")

            def reset(self) -> None:
                self.was_reset = True

        self.snapshots.save("cryptini", "2024-01-01", {"solved": True})
        engine = BrokenEngine()
        self.assertFalse(self.factory()._restore(Game.CRYPTINI, "2024-01-01", engine))
        self.assertTrue(engine.was_reset)

    def test_special_letterhead_uses_slug_key(self) -> None:
        write(self.root, "letterhead/allowed.txt", "rated\n")
        session = self.factory().open_letterhead(slug="party")
        self.assertEqual(session.key, "party")
        self.assertEqual(session.engine.answer, "PARTY")
        with self.assertRaises(PuzzleNotFoundError):
            self.factory().open_letterhead(slug="missing")


if __name__ == "__main__":
    unittest.main()
