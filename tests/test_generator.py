import unittest
from datetime import date
from decimal import Decimal
from unittest import mock

from gamecorner.core.exceptions import GenerationExhaustedError
from gamecorner.data.dictionary import WordDictionary
from gamecorner.engine.generator import (
    GeneratorConfig,
    PuzzleGenerator,
    round_half_away,
    seed_string,
    stable_seed,
)
from gamecorner.engine.hexicon import target_score


WORDS = [
    "abcdefg",
    "face",
    "cafe",
    "bead",
    "faced",
    "decaf",
    "badge",
    "caged",
    "edge",
    "beef",
    "gaffe",
]


class SeedTests(unittest.TestCase):
    def test_seed_string(self) -> None:
        self.assertEqual(seed_string(date(2024, 1, 2)), "2024-01-02")
        self.assertEqual(seed_string(date(2024, 1, 2), "s"), "2024-01-02:s")

    def test_stable_seed_is_signed_32_bit(self) -> None:
        seed = stable_seed("2024-01-02")
        self.assertEqual(seed, stable_seed("2024-01-02"))
        self.assertGreaterEqual(seed, -(2**31))
        self.assertLess(seed, 2**31)

    def test_round_half_away_from_zero(self) -> None:
        self.assertEqual(round_half_away(Decimal("2.5")), 3)
        self.assertEqual(round_half_away(Decimal("3.5")), 4)
        self.assertEqual(round_half_away(Decimal("2.4")), 2)


class GeneratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dictionary = WordDictionary.from_words(WORDS)
        self.config = GeneratorConfig(min_valid_words=1, max_valid_words=250)

    def test_same_date_yields_same_puzzle(self) -> None:
        first = PuzzleGenerator(self.dictionary, self.config).generate_for_date(date(2024, 3, 1))
        second = PuzzleGenerator(self.dictionary, self.config).generate_for_date(date(2024, 3, 1))
        self.assertEqual(first, second)

    def test_generated_puzzle_is_consistent(self) -> None:
        puzzle = PuzzleGenerator(self.dictionary, self.config).generate_for_date(date(2024, 3, 1))
        self.assertEqual(puzzle.date, "2024-03-01")
        self.assertEqual(puzzle.letters[0], puzzle.required)
        self.assertEqual(sorted(puzzle.letters), list("abcdefg"))
        self.assertEqual(puzzle.pangram, "abcdefg")
        self.assertIn("abcdefg", puzzle.words)
        self.assertTrue(all(puzzle.required in word for word in puzzle.words))

        total = target_score(puzzle.words, puzzle.letters)
        self.assertEqual(puzzle.target_score, round_half_away(Decimal(total) * Decimal("0.3")))

    def test_document_carries_letters_and_words(self) -> None:
        puzzle = PuzzleGenerator(self.dictionary, self.config).generate_for_date(date(2024, 3, 1))
        document = puzzle.to_document()
        self.assertEqual(document.required, puzzle.required)
        self.assertEqual(document.letters, puzzle.letters)
        self.assertEqual(document.words, puzzle.words)

    def test_salt_changes_seed_deterministically(self) -> None:
        generator = PuzzleGenerator(self.dictionary, self.config)
        plain = generator.generate_for_date(date(2024, 3, 1))
        salted = generator.generate_for_date(date(2024, 3, 1), salt="x")
        self.assertEqual(plain.seed, "2024-03-01")
        self.assertEqual(salted.seed, "2024-03-01:x")
        self.assertNotEqual(stable_seed(plain.seed), stable_seed(salted.seed))
        self.assertEqual(generator.generate_for_date(date(2024, 3, 1), salt="x"), salted)

        configured = GeneratorConfig(min_valid_words=1, max_valid_words=250, salt="x")
        self.assertEqual(PuzzleGenerator(self.dictionary, configured).generate_for_date(date(2024, 3, 1)), salted)

    def test_exhaustion_raises(self) -> None:
        dictionary = WordDictionary.from_words(["face", "cafe"])
        config = GeneratorConfig(min_valid_words=10, fallback_iterations=20)
        with self.assertRaises(GenerationExhaustedError):
            PuzzleGenerator(dictionary, config).generate_for_date(date(2024, 3, 1))


class FallbackTests(unittest.TestCase):
    def test_random_sets_used_without_pangram_words(self) -> None:
        dictionary = WordDictionary.from_words(["aaaa", "eeee", "ssss"])
        config = GeneratorConfig(min_valid_words=1)
        puzzle = PuzzleGenerator(dictionary, config).generate_for_date(date(2024, 3, 1))
        self.assertEqual(puzzle.pangram, "")
        self.assertEqual(len(set(puzzle.letters)), 7)
        self.assertEqual(puzzle.letters[0], puzzle.required)
        self.assertTrue(puzzle.words)
        self.assertTrue(all(puzzle.required in word for word in puzzle.words))

        again = PuzzleGenerator(dictionary, config).generate_for_date(date(2024, 3, 1))
        self.assertEqual(again, puzzle)

    def test_zero_pangram_attempts_skips_pangram_pass(self) -> None:
        dictionary = WordDictionary.from_words(["abcdefg", "aaaa", "eeee"])
        generator = PuzzleGenerator(dictionary, GeneratorConfig(min_valid_words=1, pangram_attempts=0))
        with mock.patch.object(generator, "_try_letter_set", wraps=generator._try_letter_set) as attempt:
            puzzle = generator.generate_for_date(date(2024, 3, 1))
        self.assertTrue(all("pangram" not in call.kwargs for call in attempt.call_args_list))
        self.assertTrue(all(puzzle.required in word for word in puzzle.words))

    def test_pangram_attempts_cap_the_pangram_pass(self) -> None:
        dictionary = WordDictionary.from_words(["abcdefg", "hijklmn", "opqrstu"])
        config = GeneratorConfig(min_valid_words=10, pangram_attempts=2, fallback_iterations=5)
        generator = PuzzleGenerator(dictionary, config)
        with mock.patch.object(generator, "_try_letter_set", wraps=generator._try_letter_set) as attempt:
            with self.assertRaises(GenerationExhaustedError):
                generator.generate_for_date(date(2024, 3, 1))
        pangram_calls = [call for call in attempt.call_args_list if "pangram" in call.kwargs]
        self.assertEqual(len(pangram_calls), 2)
        self.assertEqual(attempt.call_count, 7)


if __name__ == "__main__":
    unittest.main()
