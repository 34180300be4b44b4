# cube_challenge/tests/test_random_source.py
import random
import unittest

from cube_challenge.logic.random_source import RandomSourceError, ScriptedRandomSource, choice


class TestRandomSource(unittest.TestCase):
    def test_choice_uses_one_draw(self):
        rng = ScriptedRandomSource([2])
        self.assertEqual(choice(rng, ["a", "b", "c"]), "c")
        self.assertEqual(rng.draws, 1)

    def test_choice_with_random(self):
        self.assertIn(choice(random.Random(0), "xyz"), "xyz")

    def test_out_of_range_value(self):
        with self.assertRaises(RandomSourceError):
            choice(ScriptedRandomSource([5]), ["a", "b"])

    def test_exhausted(self):
        rng = ScriptedRandomSource([])
        with self.assertRaises(RandomSourceError):
            rng.randint(0, 1)

    def test_empty_sequence(self):
        with self.assertRaises(ValueError):
            choice(random.Random(0), [])


if __name__ == "__main__":
    unittest.main()
