"""Tests for placeholder resolution and value formatting."""

from __future__ import annotations

import datetime

import pytest

from label_variables.resolver import (
    VariableKind,
    bind_variables,
    classify,
    parse_date,
    resolve,
    split_placeholder,
)


def _resolve(text: str, **values) -> str:
    return resolve(text, bind_variables(values))


# ---------------------------------------------------------------------------
# Binding
# ---------------------------------------------------------------------------
class TestClassify:
    def test_boolean_before_number(self) -> None:
        assert classify(True).kind is VariableKind.BOOLEAN
        assert classify(1).kind is VariableKind.NUMBER

    def test_iso_string_is_date(self) -> None:
        bound = classify("2024-01-05")
        assert bound.kind is VariableKind.DATE
        assert bound.value == datetime.datetime(2024, 1, 5)

    def test_digit_string_is_not_date(self) -> None:
        assert classify("12345678").kind is VariableKind.STRING

    def test_plain_string(self) -> None:
        assert classify("Doe").kind is VariableKind.STRING

    def test_parse_date_accepts_zulu(self) -> None:
        parsed = parse_date("2024-01-05T10:30:00Z")
        assert parsed is not None
        assert parsed.utcoffset() == datetime.timedelta(0)

    def test_parse_date_rejects_garbage(self) -> None:
        assert parse_date("2024-13-45") is None
        assert parse_date("tomorrow") is None


class TestBindVariables:
    def test_skips_invalid_names_and_none(self) -> None:
        bindings = bind_variables({"1bad": 1, "ok": 2, "gone": None, "with space": "x"})
        assert list(bindings) == ["ok"]


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------
class TestResolve:
    def test_simple_substitution(self) -> None:
        assert _resolve("Hi {{name}}", name="Doe") == "Hi Doe"

    def test_unbound_placeholder_is_left_verbatim(self) -> None:
        assert _resolve("{{x}}") == "{{x}}"
        assert resolve("{{x|upper}}", {"x": None}) == "{{x|upper}}"

    def test_several_placeholders(self) -> None:
        assert _resolve("{{a}}-{{b}}-{{a}}", a="1", b="2") == "1-2-1"

    def test_whitespace_inside_braces(self) -> None:
        assert _resolve("{{ name | upper }}", name="Doe") == "DOE"

    def test_raw_values_are_classified_on_the_fly(self) -> None:
        assert resolve("{{n|decimal:1}}", {"n": 2}) == "2.0"

    def test_non_string_input_passes_through(self) -> None:
        assert resolve(None, {}) is None
        assert resolve(5, {}) == 5

    def test_text_without_placeholders_is_unchanged(self) -> None:
        assert _resolve("plain text", name="Doe") == "plain text"

    def test_split_placeholder_keeps_boolean_phrases(self) -> None:
        assert split_placeholder("flag|Yes|No") == ("flag", "Yes|No")
        assert split_placeholder("name") == ("name", None)
        assert split_placeholder("name|") == ("name", None)


class TestDateFormat:
    def test_default_format(self) -> None:
        assert _resolve("{{d}}", d=datetime.date(2024, 1, 5)) == "01/05/2024"

    def test_iso_format(self) -> None:
        assert _resolve("{{d|YYYY-MM-DD}}", d="2024-01-05") == "2024-01-05"

    def test_month_names(self) -> None:
        when = datetime.date(2024, 1, 5)
        assert _resolve("{{d|MMMM DD, YYYY}}", d=when) == "January 05, 2024"
        assert _resolve("{{d|MMM D, YY}}", d=when) == "Jan 5, 24"

    def test_time_tokens(self) -> None:
        when = datetime.datetime(2024, 1, 5, 9, 7, 3)
        assert _resolve("{{d|HH:mm:ss}}", d=when) == "09:07:03"
        assert _resolve("{{d|H:m:s}}", d=when) == "9:7:3"

    def test_dates_have_midnight_time(self) -> None:
        assert _resolve("{{d|HH:mm}}", d=datetime.date(2024, 1, 5)) == "00:00"


class TestNumberFormat:
    def test_plain(self) -> None:
        assert _resolve("{{n}}", n=3) == "3"
        assert _resolve("{{n}}", n=3.0) == "3"
        assert _resolve("{{n}}", n=2.5) == "2.5"

    def test_decimal(self) -> None:
        assert _resolve("{{n|decimal:2}}", n=3) == "3.00"

    def test_currency(self) -> None:
        assert _resolve("{{n|currency}}", n=1234.5) == "$1,234.50"
        assert _resolve("{{n|currency}}", n=-3) == "-$3.00"

    def test_percent(self) -> None:
        assert _resolve("{{n|percent}}", n=0.256) == "25.6%"

    def test_pad(self) -> None:
        assert _resolve("{{n|pad:5}}", n=42) == "00042"

    def test_first_recognised_directive_wins(self) -> None:
        assert _resolve("{{n|decimal:2,currency}}", n=3) == "3.00"
        assert _resolve("{{n|currency,decimal:2}}", n=3) == "$3.00"

    def test_unknown_directives_are_skipped(self) -> None:
        assert _resolve("{{n|bogus,decimal:1}}", n=2) == "2.0"

    def test_malformed_directive_is_ignored(self) -> None:
        assert _resolve("{{n|decimal:x}}", n=3.5) == "3.5"
        assert _resolve("{{n|pad:-1}}", n=7) == "7"


class TestBooleanFormat:
    @pytest.mark.parametrize(
        "value, spec, expected",
        [
            (True, "Yes|No", "Yes"),
            (False, "Yes|No", "No"),
            (True, None, "true"),
            (False, None, "false"),
            (False, "Yes", "false"),
        ],
    )
    def test_phrases(self, value: bool, spec, expected: str) -> None:
        text = "{{flag|%s}}" % spec if spec else "{{flag}}"
        assert _resolve(text, flag=value) == expected


class TestStringFormat:
    def test_directives_chain_in_order(self) -> None:
        assert _resolve("{{s|trim,upper}}", s="  hello world  ") == "HELLO WORLD"

    def test_title(self) -> None:
        assert _resolve("{{s|title}}", s="hELLO wORLD") == "Hello World"

    def test_truncate(self) -> None:
        assert _resolve("{{s|truncate:5}}", s="abcdefgh") == "abcde..."
        assert _resolve("{{s|truncate:5}}", s="abc") == "abc"

    def test_pad_right(self) -> None:
        assert _resolve("[{{s|pad:6}}]", s="ab") == "[ab    ]"

    def test_malformed_directives_leave_value(self) -> None:
        assert _resolve("{{s|truncate:x,shout}}", s="abc") == "abc"
