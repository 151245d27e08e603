"""Unit tests for datadrop.services.row_mapper: cleaning, integer parsing, alias lookup, validation."""

import unittest

from datadrop.schemas.records import CanonicalRow
from datadrop.services.row_mapper import (
    FIELD_ALIASES,
    INVALID_ID_REASON,
    RowValidationError,
    clean_keys,
    clean_string,
    lookup,
    map_row,
    to_int_or_none,
)


class TestCleanString(unittest.TestCase):
    """clean_string removes a leading BOM and trims."""

    def test_bom_and_whitespace(self) -> None:
        self.assertEqual(clean_string("\ufeff  hello  "), "hello")

    def test_whitespace_only(self) -> None:
        self.assertEqual(clean_string("  test  "), "test")

    def test_empty_and_none(self) -> None:
        self.assertEqual(clean_string(""), "")
        self.assertEqual(clean_string(None), "")


class TestToIntOrNone(unittest.TestCase):
    """to_int_or_none parses the leading base-10 integer."""

    def test_valid_numbers(self) -> None:
        self.assertEqual(to_int_or_none("123"), 123)
        self.assertEqual(to_int_or_none("  456  "), 456)
        self.assertEqual(to_int_or_none("\ufeff7"), 7)
        self.assertEqual(to_int_or_none("-3"), -3)
        self.assertEqual(to_int_or_none("007"), 7)

    def test_integer_part_only(self) -> None:
        self.assertEqual(to_int_or_none("123.45"), 123)
        self.assertEqual(to_int_or_none("12abc"), 12)

    def test_invalid_inputs(self) -> None:
        self.assertIsNone(to_int_or_none(""))
        self.assertIsNone(to_int_or_none("abc"))
        self.assertIsNone(to_int_or_none(None))
        self.assertIsNone(to_int_or_none("   "))
        self.assertIsNone(to_int_or_none(".5"))
        self.assertIsNone(to_int_or_none("\u0661\u0662"))
        self.assertIsNone(to_int_or_none("\uff11\uff12"))


class TestCleanKeys(unittest.TestCase):
    """clean_keys normalizes keys and leaves values alone."""

    def test_keys_cleaned_values_untouched(self) -> None:
        row = {"\ufeffid": " 1 ", " name ": "A"}
        self.assertEqual(clean_keys(row), {"id": " 1 ", "name": "A"})

    def test_returns_new_mapping(self) -> None:
        row = {"id": "1"}
        cleaned = clean_keys(row)
        cleaned["id"] = "2"
        self.assertEqual(row["id"], "1")


class TestLookup(unittest.TestCase):
    """lookup tries aliases in order; the first present, non-empty value wins."""

    def test_every_alias_resolves(self) -> None:
        for field, aliases in FIELD_ALIASES.items():
            for alias in aliases:
                with self.subTest(field=field, alias=alias):
                    self.assertEqual(lookup({alias: "v"}, field), "v")

    def test_priority_order(self) -> None:
        self.assertEqual(lookup({"ID": "3", "Id": "2", "id": "1"}, "id"), "1")
        self.assertEqual(lookup({"POSTID": "9", "post_id": "8"}, "post_id"), "8")

    def test_empty_alias_falls_through(self) -> None:
        self.assertEqual(lookup({"id": "", "Id": "  ", "ID": "5"}, "id"), "5")

    def test_missing_everywhere(self) -> None:
        self.assertEqual(lookup({"identifier": "5"}, "id"), "")

    def test_unknown_casing_not_matched(self) -> None:
        self.assertEqual(lookup({"iD": "5"}, "id"), "")


class TestMapRow(unittest.TestCase):
    """map_row produces CanonicalRow or raises RowValidationError."""

    def test_full_row(self) -> None:
        row = {
            "postId": "1",
            "id": "2",
            "name": "  Alice ",
            "email": "a@example.com",
            "body": "\ufeffHello",
        }
        self.assertEqual(
            map_row(row),
            CanonicalRow(post_id=1, id=2, name="Alice", email="a@example.com", body="Hello"),
        )

    def test_uppercase_headers(self) -> None:
        row = {"POSTID": "4", "ID": "5", "NAME": "N", "EMAIL": "E", "BODY": "B"}
        mapped = map_row(row)
        self.assertEqual((mapped.post_id, mapped.id, mapped.name), (4, 5, "N"))

    def test_post_id_invalid_becomes_none(self) -> None:
        self.assertIsNone(map_row({"id": "1", "postId": "n/a"}).post_id)
        self.assertIsNone(map_row({"id": "1"}).post_id)

    def test_missing_string_fields_default_empty(self) -> None:
        mapped = map_row({"id": "1"})
        self.assertEqual((mapped.name, mapped.email, mapped.body), ("", "", ""))

    def test_missing_id_rejected(self) -> None:
        with self.assertRaises(RowValidationError) as ctx:
            map_row({"name": "Bob"})
        self.assertEqual(ctx.exception.reason, INVALID_ID_REASON)

    def test_empty_id_rejected(self) -> None:
        with self.assertRaises(RowValidationError):
            map_row({"id": "", "name": "Bob"})

    def test_non_numeric_id_rejected(self) -> None:
        with self.assertRaises(RowValidationError):
            map_row({"id": "abc"})

    def test_first_non_empty_alias_decides_validity(self) -> None:
        with self.assertRaises(RowValidationError):
            map_row({"id": "abc", "Id": "5"})


if __name__ == "__main__":
    unittest.main()
