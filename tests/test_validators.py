import unittest
from unittest.mock import patch

from ipv4check.core.config import Config
from ipv4check.validators.charset_validator import CharsetValidator
from ipv4check.validators.dot_count_validator import DotCountValidator
from ipv4check.validators.length_validator import LengthValidator
from ipv4check.validators.segment_validator import SegmentValidator


class TestLengthValidator(unittest.TestCase):

    def test_too_short(self):
        """Test that a short candidate is rejected with the length reason."""
        validator = LengthValidator("1.1.1")
        result = validator.validate()

        self.assertEqual(len(validator.errors), 1)
        self.assertEqual(result["reason"], "length")
        self.assertIn("5 characters long", validator.errors[0])
        self.assertEqual(result["info"]["length"], 5)

    def test_boundaries_pass(self):
        for candidate in ("0.0.0.0", "255.255.255.255"):
            with self.subTest(candidate=candidate):
                validator = LengthValidator(candidate)
                validator.validate()
                self.assertTrue(validator.passed)


class TestCharsetValidator(unittest.TestCase):

    def test_reports_offending_character(self):
        validator = CharsetValidator("1.2.3.a")
        validator.validate()

        self.assertEqual(validator.reason, "charset")
        self.assertIn("'a' at position 6", validator.errors[0])
        self.assertEqual(validator.warnings, [])

    def test_whitespace_adds_warning(self):
        """Test that untrimmed whitespace is pointed out."""
        validator = CharsetValidator(" 1.1.1.1")
        validator.validate()

        self.assertEqual(len(validator.errors), 1)
        self.assertEqual(len(validator.warnings), 1)
        self.assertIn("not trimmed", validator.warnings[0])

    def test_digits_and_dots_pass(self):
        validator = CharsetValidator("10.0.0.1")
        validator.validate()
        self.assertTrue(validator.passed)


class TestDotCountValidator(unittest.TestCase):

    def test_too_many_dots(self):
        validator = DotCountValidator("1.1.1.1.1")
        result = validator.validate()

        self.assertEqual(result["reason"], "dot_count")
        self.assertEqual(result["info"]["dots"], 4)
        self.assertIn("Found 4 dots", validator.errors[0])


class TestSegmentValidator(unittest.TestCase):

    def test_empty_segment(self):
        validator = SegmentValidator("192..1.1")
        validator.validate()

        self.assertEqual(validator.reason, "empty_segment")
        self.assertEqual(validator.errors, ["Octet 2 is empty."])

    def test_leading_zero(self):
        validator = SegmentValidator("192.168.01.1")
        validator.validate()

        self.assertEqual(validator.reason, "leading_zero")
        self.assertIn("Octet 3 ('01')", validator.errors[0])

    def test_out_of_range(self):
        validator = SegmentValidator("256.1.1.1")
        validator.validate()

        self.assertEqual(validator.reason, "range")
        self.assertIn("outside the range 0-255", validator.errors[0])

    def test_stops_at_first_bad_octet(self):
        validator = SegmentValidator("300.01.1.1")
        validator.validate()

        self.assertEqual(len(validator.errors), 1)
        self.assertEqual(validator.reason, "range")

    def test_valid_octets_recorded(self):
        validator = SegmentValidator("10.20.30.40", Config())
        result = validator.validate()

        self.assertTrue(validator.passed)
        self.assertEqual(result["info"]["octets"], [10, 20, 30, 40])

    def test_wrong_segment_count(self):
        validator = SegmentValidator("1.2.3")
        validator.validate()
        self.assertEqual(validator.reason, "segment_count")


class TestBaseValidatorFailures(unittest.TestCase):

    def test_unexpected_exception_becomes_error(self):
        """Test that a crashing gate reports a failure instead of raising."""
        with patch("ipv4check.validators.length_validator.check_length", side_effect=RuntimeError("boom")):
            validator = LengthValidator("1.1.1.1")
            with self.assertLogs("ipv4check.core.base_validator", level="ERROR"):
                result = validator.validate()

        self.assertFalse(validator.passed)
        self.assertEqual(result["reason"], "internal")
        self.assertIn("boom", result["errors"][0])


if __name__ == '__main__':
    unittest.main()
