# cube_challenge/tests/test_moves.py
import unittest

from cube_challenge.core.puzzle_types import Modifier, PuzzleType
from cube_challenge.logic.moves import MoveToken, axis_of, parse_scramble, parse_token


class TestParseToken(unittest.TestCase):
    def test_simple_faces(self):
        self.assertEqual(parse_token(PuzzleType.THREE, "R"), MoveToken("R"))
        self.assertEqual(parse_token(PuzzleType.THREE, "U'"), MoveToken("U", Modifier.INVERSE))
        self.assertEqual(parse_token(PuzzleType.THREE, "F2"), MoveToken("F", Modifier.DOUBLE))

    def test_normalizes_double_inverse(self):
        self.assertEqual(str(parse_token(PuzzleType.THREE, "D2'")), "D2")

    def test_typographic_quote(self):
        self.assertEqual(str(parse_token(PuzzleType.TWO, "R’")), "R'")

    def test_invalid_face(self):
        with self.assertRaises(ValueError):
            parse_token(PuzzleType.THREE, "X")
        with self.assertRaises(ValueError):
            parse_token(PuzzleType.TWO, "D")

    def test_double_not_allowed_on_corner_puzzles(self):
        with self.assertRaises(ValueError):
            parse_token(PuzzleType.SKEWB, "R2")
        with self.assertRaises(ValueError):
            parse_token(PuzzleType.PYRAMINX, "U2'")

    def test_clock_tokens(self):
        tok = parse_token(PuzzleType.CLOCK, "ALL-5")
        self.assertEqual((tok.face, tok.offset), ("ALL", -5))
        self.assertEqual(str(parse_token(PuzzleType.CLOCK, "UR+0")), "UR+0")
        with self.assertRaises(ValueError):
            parse_token(PuzzleType.CLOCK, "UR+7")
        with self.assertRaises(ValueError):
            parse_token(PuzzleType.CLOCK, "R+1")


class TestParseScramble(unittest.TestCase):
    def test_pyraminx_tips_split(self):
        parsed = parse_scramble(PuzzleType.PYRAMINX, "R L' U B' R l u'")
        self.assertEqual([str(m) for m in parsed.moves], ["R", "L'", "U", "B'", "R"])
        self.assertEqual([str(t) for t in parsed.tips], ["l", "u'"])

    def test_pyraminx_move_after_tip(self):
        with self.assertRaises(ValueError):
            parse_scramble(PuzzleType.PYRAMINX, "R l U")

    def test_clock_pins(self):
        parsed = parse_scramble(
            PuzzleType.CLOCK, "(u,d,d,u) UR+3 DR-1 DL+0 UL+6 ALL-5 y2 UR+2 DR+4 DL-3 UL+1 ALL+0"
        )
        self.assertEqual(parsed.pins, ("u", "d", "d", "u"))
        self.assertEqual(len(parsed.moves), 11)

    def test_clock_requires_pins(self):
        with self.assertRaises(ValueError):
            parse_scramble(PuzzleType.CLOCK, "UR+3 DR-1")

    def test_axis_of(self):
        self.assertEqual(axis_of("U"), axis_of("D"))
        self.assertNotEqual(axis_of("R"), axis_of("F"))
        with self.assertRaises(ValueError):
            axis_of("r")


if __name__ == "__main__":
    unittest.main()
