import unittest

from uniagora.core.filters import filter_rows, matches_search
from uniagora.core.validators import (
    display_phone_number, format_phone_number, is_valid_phone, storage_file_name
)


class PhoneNumberTests(unittest.TestCase):
    def test_exactly_eleven_digits_required(self):
        self.assertTrue(is_valid_phone("08012345678"))
        for phone in ("0801234567", "080123456789", "0801234567a", "+2348012345678", "", None):
            self.assertFalse(is_valid_phone(phone), phone)

    def test_trailing_newline_and_non_ascii_digits_rejected(self):
        self.assertFalse(is_valid_phone("08012345678\n"))
        self.assertFalse(is_valid_phone("٠٨٠١٢٣٤٥٦٧٨"))
        self.assertFalse(is_valid_phone(" 08012345678"))

    def test_format_replaces_leading_zero_with_country_prefix(self):
        self.assertEqual(format_phone_number("08012345678"), "+2348012345678")

    def test_display_is_inverse_of_format(self):
        self.assertEqual(display_phone_number(format_phone_number("09011112222")), "09011112222")
        self.assertEqual(display_phone_number(None), "")
        self.assertEqual(display_phone_number("5551234"), "5551234")


class StorageFileNameTests(unittest.TestCase):
    def test_timestamp_prefix_and_whitespace_replaced(self):
        self.assertEqual(
            storage_file_name("my student id.pdf", now_ms=1700000000000),
            "1700000000000-my_student_id.pdf",
        )


class SearchFilterTests(unittest.TestCase):
    rows = [
        {"title": "Logo Design", "profiles": {"full_name": "Alice Okafor"}},
        {"title": "Python Tutoring", "profiles": [{"full_name": "Bob Adeyemi"}]},
        {"title": None, "profiles": None},
    ]

    def test_blank_query_matches_everything(self):
        self.assertEqual(len(filter_rows(self.rows, "  ", ["title"])), 3)
        self.assertTrue(matches_search({}, None, ["title"]))

    def test_case_insensitive_and_nested(self):
        self.assertEqual(filter_rows(self.rows, "LOGO", ["title"]), [self.rows[0]])
        self.assertEqual(filter_rows(self.rows, "adeyemi", ["title", "profiles.full_name"]), [self.rows[1]])

    def test_no_match(self):
        self.assertEqual(filter_rows(self.rows, "plumbing", ["title", "profiles.full_name"]), [])


if __name__ == "__main__":
    unittest.main()
