
import argparse
import logging
import unittest

from quickunion.auxiliary.argparseutils import (bool_options, log_level,
                                                optional_bool, optional_int,
                                                positive_int)


class TestArgparseUtils(unittest.TestCase):
    def test_optional_int(self):
        self.assertEqual(optional_int("12"), 12)
        self.assertIsNone(optional_int(""))
        self.assertIsNone(optional_int("None"))
        with self.assertRaises(argparse.ArgumentTypeError):
            optional_int("twelve")

    def test_positive_int(self):
        self.assertEqual(positive_int("3"), 3)
        with self.assertRaises(argparse.ArgumentTypeError):
            positive_int("0")
        with self.assertRaises(argparse.ArgumentTypeError):
            positive_int("1.5")

    def test_optional_bool(self):
        self.assertTrue(optional_bool("Yes"))
        self.assertFalse(optional_bool("off"))
        self.assertIsNone(optional_bool("None"))
        with self.assertRaises(argparse.ArgumentTypeError):
            optional_bool("maybe")

    def test_bool_options(self):
        parser = argparse.ArgumentParser()
        parser.add_argument("--flag", **bool_options())
        self.assertFalse(parser.parse_args([]).flag)
        self.assertTrue(parser.parse_args(["--flag"]).flag)
        self.assertFalse(parser.parse_args(["--flag", "no"]).flag)

    def test_log_level(self):
        self.assertEqual(log_level("info"), logging.INFO)
        with self.assertRaises(argparse.ArgumentTypeError):
            log_level("verbose")


if __name__ == "__main__":
    unittest.main()
