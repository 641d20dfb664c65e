"""
Tests for the form rule tables.

These exercise app.validation directly, without HTTP.
"""

from datetime import date

import pytest

from app.validation import (
    AUTHOR_RULES,
    BOOK_INSTANCE_RULES,
    BOOK_RULES,
    GENRE_RULES,
    FieldRule,
    as_list,
    escape,
    iso_date,
    parse_date,
    required,
    trim,
    validate,
)


def messages(result):
    return [error.message for error in result.errors]


class TestAuthorRules:
    def test_valid_author(self):
        result = validate(
            {"first_name": " Ben ", "family_name": "Bova", "date_of_birth": "1932-11-08"},
            AUTHOR_RULES,
        )

        assert result.ok
        assert result.values == {
            "first_name": "Ben",
            "family_name": "Bova",
            "date_of_birth": date(1932, 11, 8),
            "date_of_death": None,
        }

    def test_first_failing_check_wins(self):
        """Test an empty name reports only the required message."""
        result = validate({"first_name": "   ", "family_name": "Doe"}, AUTHOR_RULES)

        assert messages(result) == ["First name must be specified"]
        assert result.values["family_name"] == "Doe"

    def test_name_too_long(self):
        result = validate({"first_name": "a" * 101, "family_name": "Doe"}, AUTHOR_RULES)

        assert messages(result) == ["First name must be at most 100 characters"]

    def test_markup_is_rejected_after_escaping(self):
        result = validate({"first_name": "<b>", "family_name": "Doe"}, AUTHOR_RULES)

        assert messages(result) == ["First name has non-alphanumeric characters"]
        assert result.values["first_name"] == "&lt;b&gt;"

    def test_non_ascii_letters_rejected(self):
        result = validate({"first_name": "Zoë", "family_name": "Doe"}, AUTHOR_RULES)

        assert messages(result) == ["First name has non-alphanumeric characters"]

    def test_invalid_dates(self):
        result = validate(
            {
                "first_name": "Jim",
                "family_name": "Jones",
                "date_of_birth": "yesterday",
                "date_of_death": "2020-02-30",
            },
            AUTHOR_RULES,
        )

        assert messages(result) == ["Invalid date of birth", "Invalid date of death"]


class TestGenreRules:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("", ["Genre name required"]),
            ("ab", ["Genre name must be between 3 and 100 characters"]),
            ("x" * 101, ["Genre name must be between 3 and 100 characters"]),
            ("Poetry", []),
        ],
    )
    def test_genre_name(self, name, expected):
        assert messages(validate({"name": name}, GENRE_RULES)) == expected


class TestBookRules:
    def test_missing_genre_is_empty_list(self):
        result = validate(
            {"title": "t", "author": "a", "summary": "s", "isbn": "i"}, BOOK_RULES
        )

        assert result.ok
        assert result.values["genre"] == []

    def test_single_genre_becomes_list(self):
        result = validate(
            {"title": "t", "author": "a", "summary": "s", "isbn": "i", "genre": "g1"},
            BOOK_RULES,
        )

        assert result.values["genre"] == ["g1"]

    def test_genre_entries_are_escaped(self):
        result = validate(
            {"title": "t", "author": "a", "summary": "s", "isbn": "i", "genre": ["g1", "<g2>"]},
            BOOK_RULES,
        )

        assert result.values["genre"] == ["g1", "&lt;g2&gt;"]

    def test_blank_genre_entries_dropped(self):
        result = validate(
            {"title": "t", "author": "a", "summary": "s", "isbn": "i", "genre": ["", " g1 ", "  "]},
            BOOK_RULES,
        )

        assert result.ok
        assert result.values["genre"] == ["g1"]

    def test_author_reference_longer_than_an_identifier(self):
        result = validate(
            {"title": "t", "author": "a" * 33, "summary": "s", "isbn": "i"}, BOOK_RULES
        )

        assert messages(result) == ["Invalid author"]

    def test_free_text_fields_have_no_length_limit(self):
        result = validate(
            {"title": "T & J " * 200, "author": "a", "summary": "s", "isbn": "9" * 60},
            BOOK_RULES,
        )

        assert result.ok
        assert result.values["isbn"] == "9" * 60


class TestBookInstanceRules:
    def test_defaults(self):
        result = validate({"book": "b1", "imprint": "Gollancz", "status": ""}, BOOK_INSTANCE_RULES)

        assert result.ok
        assert result.values["status"] == "Maintenance"
        assert result.values["due_back"] is None

    def test_unknown_status(self):
        result = validate({"book": "b1", "imprint": "Gollancz", "status": "Lost"}, BOOK_INSTANCE_RULES)

        assert messages(result) == ["Invalid status"]


class TestSteps:
    def test_as_list(self):
        assert as_list(None) == []
        assert as_list("a") == ["a"]
        assert as_list(["a", "b"]) == ["a", "b"]

    def test_parse_date_accepts_datetime(self):
        assert parse_date("2026-10-18T09:30:00") == date(2026, 10, 18)

    def test_parse_date_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_date("18/10/2026")

    def test_custom_rule(self):
        rule = FieldRule("code", [trim, required("Code required"), escape])

        assert rule.apply("  a&b ") == ("a&amp;b", None)
        assert rule.apply(None) == ("", "Code required")

    def test_optional_rule_skips_steps(self):
        rule = FieldRule("when", [iso_date("Bad")], optional=True, default="never")

        assert rule.apply("  ") == ("never", None)
        assert rule.apply("2026-01-01") == (date(2026, 1, 1), None)
