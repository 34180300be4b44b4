# cube_challenge/tests/test_config.py
import unittest

from cube_challenge.config import Settings, parse_hhmm


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        s = Settings.from_env({})
        self.assertEqual(s.storage_path, "data-storage.json")
        self.assertEqual(s.timezone, "Asia/Kolkata")
        self.assertEqual(s.post_time, "16:00")
        self.assertEqual(s.delete_after_hours, 24)
        self.assertEqual(s.check_interval_minutes, 60)
        self.assertFalse(s.strict_types)

    def test_overrides(self):
        s = Settings.from_env({
            "CUBE_CHALLENGE_STORAGE": "",
            "CUBE_CHALLENGE_TIMEZONE": "Europe/Madrid",
            "CUBE_CHALLENGE_POST_TIME": "09:30",
            "CUBE_CHALLENGE_DELETE_AFTER_HOURS": "12",
            "CUBE_CHALLENGE_LOG_LEVEL": "debug",
            "CUBE_CHALLENGE_STRICT_TYPES": "yes",
        })
        self.assertIsNone(s.storage_path)
        self.assertEqual(s.timezone, "Europe/Madrid")
        self.assertEqual(s.post_time, "09:30")
        self.assertEqual(s.delete_after_hours, 12)
        self.assertEqual(s.log_level, "DEBUG")
        self.assertTrue(s.strict_types)

    def test_invalid_values_name_the_variable(self):
        cases = {
            "CUBE_CHALLENGE_TIMEZONE": "Mars/Olympus",
            "CUBE_CHALLENGE_POST_TIME": "4pm",
            "CUBE_CHALLENGE_DELETE_AFTER_HOURS": "0",
            "CUBE_CHALLENGE_CHECK_INTERVAL_MINUTES": "soon",
            "CUBE_CHALLENGE_LOG_LEVEL": "LOUD",
            "CUBE_CHALLENGE_STRICT_TYPES": "maybe",
        }
        for name, value in cases.items():
            with self.assertRaisesRegex(ValueError, name):
                Settings.from_env({name: value})

    def test_parse_hhmm(self):
        self.assertEqual(parse_hhmm("16:00"), (16, 0))
        self.assertEqual(parse_hhmm("7:05"), (7, 5))
        with self.assertRaises(ValueError):
            parse_hhmm("24:00")


if __name__ == "__main__":
    unittest.main()
