"""Tests for phone number normalisation."""

import unittest

from pillr.utils.phone import normalise_phone_number


class TestNormalisePhoneNumber(unittest.TestCase):
    """Tests for normalise_phone_number."""

    def test_strips_formatting(self) -> None:
        """Test spaces, dashes, parentheses and dots are removed."""
        self.assertEqual(normalise_phone_number("+1 (555) 123-4567"), "+15551234567")
        self.assertEqual(normalise_phone_number("+44.20.7946.0958"), "+442079460958")

    def test_adds_plus(self) -> None:
        """Test a missing plus is added."""
        self.assertEqual(normalise_phone_number("15551234567"), "+15551234567")

    def test_rejects_invalid_numbers(self) -> None:
        """Test values that are not E.164 raise ValueError."""
        for value in ["", "abc", "+0123456789", "+123", "+1555123456789012"]:
            with self.subTest(value=value), self.assertRaises(ValueError):
                normalise_phone_number(value)


if __name__ == "__main__":
    unittest.main()
