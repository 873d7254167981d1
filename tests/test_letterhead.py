import unittest

from gamecorner.core.constants import RoundState, TileState
from gamecorner.core.exceptions import ContentIntegrityError
from gamecorner.core.models import LetterheadDocument
from gamecorner.engine.letterhead import NOT_ENOUGH_LETTERS, NOT_IN_WORD_LIST, LetterheadRound, score_guess


A, P, C = TileState.ABSENT, TileState.PRESENT, TileState.CORRECT

ALLOWED = ["rated", "speed", "eerie"]


def type_word(game: LetterheadRound, word: str) -> None:
    for char in word:
        game.type_char(char)


class ScoreGuessTests(unittest.TestCase):
    def test_repeated_letters_use_remaining_pool(self) -> None:
        self.assertEqual(score_guess("SPEED", "ERASE"), [P, A, P, P, A])

    def test_no_exact_matches(self) -> None:
        self.assertEqual(score_guess("RATED", "CRANE"), [P, P, A, P, A])

    def test_exact_matches_consume_letters_first(self) -> None:
        self.assertEqual(score_guess("EEEEE", "ERASE"), [C, A, A, A, C])

    def test_length_mismatch(self) -> None:
        with self.assertRaises(ValueError):
            score_guess("CRAN", "CRANE")


class LetterheadRoundTests(unittest.TestCase):
    def setUp(self) -> None:
        self.game = LetterheadRound.from_document(
            LetterheadDocument(answer="crane", date="2024-01-01"), ALLOWED
        )

    def test_rejects_short_and_unknown_guesses(self) -> None:
        type_word(self.game, "rat")
        result = self.game.submit()
        self.assertFalse(result.accepted)
        self.assertEqual(result.message, NOT_ENOUGH_LETTERS)

        self.game.backspace()
        self.game.backspace()
        self.game.backspace()
        type_word(self.game, "zzzzz")
        result = self.game.submit()
        self.assertEqual(result.message, NOT_IN_WORD_LIST)
        self.assertEqual(self.game.current_row, 0)
        self.assertEqual(self.game.current_guess(), "ZZZZZ")

    def test_backspace_clears_then_moves_left(self) -> None:
        type_word(self.game, "rated")
        self.assertEqual(self.game.current_col, 4)
        self.game.backspace()
        self.assertEqual(self.game.current_guess(), "RATE")
        self.assertEqual(self.game.current_col, 4)
        self.game.backspace()
        self.assertEqual(self.game.current_guess(), "RAT")
        self.assertEqual(self.game.current_col, 3)

    def test_input_helpers_report_changes(self) -> None:
        self.assertFalse(self.game.backspace().accepted)
        self.assertFalse(self.game.type_char("é").accepted)
        self.assertTrue(self.game.type_char("r").accepted)
        self.assertTrue(self.game.set_active(0, 0).accepted)
        self.assertFalse(self.game.set_active(0, 5).accepted)
        self.assertTrue(self.game.backspace().accepted)
        self.assertEqual(self.game.current_guess(), "")

    def test_set_active_stays_on_current_row(self) -> None:
        type_word(self.game, "rated")
        self.game.set_active(0, 1)
        self.game.type_char("x")
        self.assertEqual(self.game.current_guess(), "RXTED")
        self.game.set_active(1, 0)
        self.assertEqual(self.game.current_col, 2)

    def test_scored_row_and_keyboard(self) -> None:
        type_word(self.game, "rated")
        self.assertTrue(self.game.submit().accepted)
        self.assertEqual([tile.state for tile in self.game.grid[0]], [P, P, A, P, A])
        self.assertEqual(self.game.key_states["R"], P)
        self.assertEqual(self.game.key_states["T"], A)
        self.assertEqual(self.game.current_row, 1)
        self.assertEqual(self.game.current_col, 0)

    def test_keyboard_never_downgrades(self) -> None:
        type_word(self.game, "eerie")
        self.game.submit()
        self.assertEqual(self.game.key_states["E"], C)
        type_word(self.game, "rated")
        self.game.submit()
        self.assertEqual(self.game.key_states["E"], C)

    def test_win(self) -> None:
        type_word(self.game, "rated")
        self.game.submit()
        type_word(self.game, "crane")
        self.assertTrue(self.game.submit().accepted)
        self.assertEqual(self.game.state, RoundState.WON)
        self.assertIsNone(self.game.answer_revealed)
        self.assertEqual(self.game.guesses(), ["RATED", "CRANE"])
        self.assertEqual(self.game.share_rows()[1], "\U0001F7E9" * 5)

        self.assertFalse(self.game.type_char("x").accepted)
        finished = self.game.submit()
        self.assertFalse(finished.accepted)
        self.assertIsNone(finished.message)

    def test_loss_after_last_row(self) -> None:
        for _ in range(6):
            type_word(self.game, "rated")
            self.game.submit()
        self.assertEqual(self.game.state, RoundState.LOST)
        self.assertEqual(self.game.answer_revealed, "CRANE")
        self.assertEqual(len(self.game.share_rows()), 6)

    def test_answer_must_match_length(self) -> None:
        with self.assertRaises(ContentIntegrityError):
            LetterheadRound("cranes", ALLOWED)

    def test_answer_is_always_allowed(self) -> None:
        game = LetterheadRound("ghost", [])
        type_word(game, "ghost")
        self.assertTrue(game.submit().accepted)

    def test_answer_must_be_plain_letters(self) -> None:
        with self.assertRaises(ContentIntegrityError):
            LetterheadRound("éclat", ALLOWED)


class LetterheadSnapshotTests(unittest.TestCase):
    def test_restore_replays_guesses(self) -> None:
        game = LetterheadRound("crane", ALLOWED)
        type_word(game, "rated")
        game.submit()
        type_word(game, "crane")
        game.submit()
        snapshot = game.to_snapshot("2024-01-01")
        self.assertEqual(snapshot["letterhead"], "CRANE")

        restored = LetterheadRound("crane", ALLOWED)
        self.assertTrue(restored.restore(snapshot))
        self.assertEqual(restored.state, RoundState.WON)
        self.assertEqual(restored.guesses(), ["RATED", "CRANE"])
        self.assertEqual(restored.key_states["C"], C)

    def test_snapshot_for_other_answer_is_ignored(self) -> None:
        restored = LetterheadRound("crane", ALLOWED)
        self.assertFalse(restored.restore({"guesses": ["RATED"], "letterhead": "SPEED"}))
        self.assertEqual(restored.guesses(), [])

    def test_restore_skips_unplayable_guesses(self) -> None:
        restored = LetterheadRound("crane", ALLOWED)
        snapshot = {"guesses": ["ÉCLAT", 5, "ZZZZZ", "rated"], "letterhead": "CRANE"}
        self.assertTrue(restored.restore(snapshot))
        self.assertEqual(restored.guesses(), ["RATED"])
        self.assertTrue(restored.is_playing)

    def test_restore_rejects_malformed_guess_list(self) -> None:
        restored = LetterheadRound("crane", ALLOWED)
        self.assertFalse(restored.restore({"guesses": "RATED", "letterhead": "CRANE"}))
        self.assertEqual(restored.guesses(), [])


if __name__ == "__main__":
    unittest.main()
