import unittest

from gamecorner.core.models import CryptiniDocument
from gamecorner.engine.cryptini import CryptiniSession


def make_session() -> CryptiniSession:
    return CryptiniSession.from_document(
        CryptiniDocument(
            clue="Confusion in pu mix (5)",
            answer="Mix-up",
            enumeration="3-2",
            hints=["Anagram", "Anagram", "Of 'pu mix'"],
            alternatives=["muddle"],
        )
    )


class CryptiniTests(unittest.TestCase):
    def test_answer_matching_is_normalized(self) -> None:
        session = make_session()
        self.assertTrue(session.is_answer("MIXUP"))
        self.assertTrue(session.is_answer(" mix up "))
        self.assertTrue(session.is_answer("Muddle"))
        self.assertFalse(session.is_answer("mess"))

    def test_submit(self) -> None:
        session = make_session()
        for char in "mess":
            session.append(char)
        self.assertFalse(session.submit().accepted)
        self.assertEqual(session.current_entry, "")
        self.assertFalse(session.solved)

        for char in "mixup":
            session.append(char)
        self.assertTrue(session.submit().accepted)
        self.assertTrue(session.solved)
        self.assertEqual(session.display_answer, "Mix-up")

    def test_input_helpers_report_changes(self) -> None:
        session = make_session()
        self.assertFalse(session.backspace().accepted)
        self.assertFalse(session.append("").accepted)
        self.assertTrue(session.append("m").accepted)
        self.assertTrue(session.backspace().accepted)
        self.assertTrue(session.clear_entry().accepted)
        self.assertEqual(session.current_entry, "")

    def test_hints_are_deduplicated_and_capped(self) -> None:
        session = make_session()
        self.assertEqual(len(session.hints), 2)
        self.assertTrue(session.reveal_hint().accepted)
        self.assertTrue(session.reveal_hint().accepted)
        self.assertFalse(session.has_more_hints)
        self.assertFalse(session.reveal_hint().accepted)
        self.assertEqual(session.visible_hints, ["Anagram", "Of 'pu mix'"])

    def test_reveal_and_reset(self) -> None:
        session = make_session()
        session.reveal()
        self.assertTrue(session.revealed and session.solved)
        session.reset()
        self.assertFalse(session.solved or session.revealed)
        self.assertIsNone(session.display_answer)

    def test_restore_clamps_hint_count(self) -> None:
        session = make_session()
        session.restore({"solved": True, "revealed": False, "hints_revealed": 9})
        self.assertEqual(session.hints_revealed, 2)
        self.assertEqual(session.current_entry, "Mix-up")

        session.restore({"hints_revealed": "two"})
        self.assertEqual(session.hints_revealed, 0)
        self.assertFalse(session.solved)


if __name__ == "__main__":
    unittest.main()
