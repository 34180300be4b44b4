# cube_challenge/tests/test_scramble.py
import random
import unittest

from cube_challenge.core.puzzle_types import Modifier, PuzzleType, UnknownPuzzleType
from cube_challenge.logic import scramble as gen
from cube_challenge.logic.moves import GRAMMARS, axis_of, parse_scramble
from cube_challenge.logic.random_source import RandomSourceError, ScriptedRandomSource
from cube_challenge.logic.scramble import generate_scramble, scramble_length

CUBE_FAMILY = (PuzzleType.THREE, PuzzleType.THREE_BLD, PuzzleType.THREE_OH)


class TestScrambleProperties(unittest.TestCase):
    def setUp(self):
        self.rng = random.Random(1234)

    def test_length_invariant(self):
        for puzzle in PuzzleType:
            low, high = scramble_length(puzzle)
            for _ in range(200):
                parsed = parse_scramble(puzzle, generate_scramble(puzzle, rng=self.rng))
                self.assertTrue(low <= len(parsed.moves) <= high, puzzle)

    def test_fixed_lengths(self):
        self.assertEqual(scramble_length(PuzzleType.THREE), (20, 20))
        self.assertEqual(scramble_length(PuzzleType.THREE_BLD), (20, 20))
        self.assertEqual(scramble_length(PuzzleType.TWO), (11, 11))
        self.assertEqual(scramble_length(PuzzleType.SKEWB), (9, 9))
        self.assertEqual(scramble_length(PuzzleType.PYRAMINX), (8, 10))
        self.assertEqual(scramble_length(PuzzleType.CLOCK), (11, 11))

    def test_cube_no_axis_repeat_1000(self):
        for _ in range(1000):
            faces = [m.face for m in parse_scramble(
                PuzzleType.THREE, generate_scramble(PuzzleType.THREE, rng=self.rng)
            ).moves]
            self.assertEqual(len(faces), 20)
            for a, b in zip(faces, faces[1:]):
                self.assertNotEqual(axis_of(a), axis_of(b))

    def test_cube_lookback_two_back(self):
        for puzzle in CUBE_FAMILY:
            for _ in range(200):
                faces = [m.face for m in parse_scramble(
                    puzzle, generate_scramble(puzzle, rng=self.rng)
                ).moves]
                for a, c in zip(faces, faces[2:]):
                    self.assertNotEqual(a, c)

    def test_no_immediate_repeat(self):
        for puzzle in PuzzleType:
            for _ in range(200):
                faces = [m.face for m in parse_scramble(
                    puzzle, generate_scramble(puzzle, rng=self.rng)
                ).moves]
                for a, b in zip(faces, faces[1:]):
                    self.assertNotEqual(a, b, puzzle)

    def test_alphabet_closure(self):
        for puzzle, grammar in GRAMMARS.items():
            for _ in range(200):
                text = generate_scramble(puzzle, rng=self.rng)
                for tok in text.split():
                    face, suffix = tok[0], tok[1:]
                    self.assertIn(face, grammar.faces | grammar.tips)
                    self.assertIn(Modifier(suffix), grammar.modifiers)

    def test_pyraminx_tips_1000(self):
        for _ in range(1000):
            parsed = parse_scramble(
                PuzzleType.PYRAMINX, generate_scramble(PuzzleType.PYRAMINX, rng=self.rng)
            )
            tips = [t.face for t in parsed.tips]
            self.assertLessEqual(len(tips), gen.MAX_PYRAMINX_TIPS)
            self.assertEqual(len(tips), len(set(tips)))
            for t in parsed.tips:
                self.assertIn(t.modifier, (Modifier.NONE, Modifier.INVERSE))

    def test_clock_structure(self):
        pattern = r"^\([ud],[ud],[ud],[ud]\)$"
        for _ in range(200):
            tokens = generate_scramble(PuzzleType.CLOCK, rng=self.rng).split()
            self.assertRegex(tokens[0], pattern)
            self.assertEqual(len(tokens[1:]), 11)
            self.assertEqual(tokens[6], "y2")

    def test_single_line_without_fences(self):
        for puzzle in PuzzleType:
            text = generate_scramble(puzzle, rng=self.rng)
            self.assertNotIn("\n", text)
            self.assertNotIn("```", text)


class TestScrambleDeterminism(unittest.TestCase):
    def test_same_seed_same_output(self):
        for puzzle in PuzzleType:
            self.assertEqual(
                generate_scramble(puzzle, seed=99), generate_scramble(puzzle, seed=99)
            )

    def test_scripted_3x3(self):
        rng = ScriptedRandomSource([0] * 40)
        self.assertEqual(generate_scramble(PuzzleType.THREE, rng=rng), " ".join(["U L D R"] * 5))
        self.assertEqual(rng.draws, 40)

    def test_scripted_2x2(self):
        rng = ScriptedRandomSource([0] * 22)
        self.assertEqual(generate_scramble(PuzzleType.TWO, rng=rng), "R U R U R U R U R U R")

    def test_scripted_skewb(self):
        rng = ScriptedRandomSource([0, 0] + [0, 1] * 8)
        self.assertEqual(
            generate_scramble(PuzzleType.SKEWB, rng=rng), "R L' R' L' R' L' R' L' R'"
        )

    def test_scripted_pyraminx(self):
        rng = ScriptedRandomSource([8] + [0] * 16 + [2, 3, 1, 0, 0])
        self.assertEqual(
            generate_scramble(PuzzleType.PYRAMINX, rng=rng), "R L R L R L R L b' r"
        )
        self.assertEqual(rng.draws, 22)

    def test_scripted_clock(self):
        rng = ScriptedRandomSource([0, 1, 1, 0, 3, -1, 0, 6, -5, 2, 4, -3, 1, 0])
        self.assertEqual(
            generate_scramble(PuzzleType.CLOCK, rng=rng),
            "(u,d,d,u) UR+3 DR-1 DL+0 UL+6 ALL-5 y2 UR+2 DR+4 DL-3 UL+1 ALL+0",
        )

    def test_exhausted_source_propagates(self):
        with self.assertRaises(RandomSourceError):
            generate_scramble(PuzzleType.THREE, rng=ScriptedRandomSource([0, 0]))


class TestDispatch(unittest.TestCase):
    def test_accepts_string_tags(self):
        text = generate_scramble("Skewb", seed=5)
        self.assertEqual(text, generate_scramble(PuzzleType.SKEWB, seed=5))

    def test_unknown_falls_back_to_3x3(self):
        with self.assertLogs("cube_challenge.logic.scramble", level="WARNING"):
            text = generate_scramble("4x4", rng=random.Random(7))
        self.assertEqual(text, generate_scramble(PuzzleType.THREE, rng=random.Random(7)))
        self.assertEqual(len(parse_scramble(PuzzleType.THREE, text).moves), 20)

    def test_unknown_strict_raises(self):
        with self.assertRaises(UnknownPuzzleType):
            generate_scramble("4x4", strict=True)

    def test_dispatch_is_exhaustive(self):
        self.assertEqual(set(gen.GENERATORS), set(PuzzleType))


if __name__ == "__main__":
    unittest.main()
