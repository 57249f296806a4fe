"""Tests for wayfile.routing.constraints — file-name classifier and constraints."""

from decimal import Decimal

import pytest

from wayfile.errors import MissingArgumentError
from wayfile.routing.constraints import (
    DEFAULT_CONSTRAINTS,
    FileNameConstraint,
    LiteralConstraint,
    NonFileNameConstraint,
    RouteConstraint,
    RouteDirection,
    is_file_name,
    to_invariant_str,
)

FILE_NAMES = [
    "/a/b/c.txt",
    "/hello.world.txt",
    "hello.world.txt",
    ".gitignore",
    "foo..bar",
    "a.b",
    "/x/.htaccess",
    "archive.tar.gz",
    "dir.v2/readme.md",
]

NOT_FILE_NAMES = [
    "/a/b/c",
    "/a/b.d/c",
    "/a/b.d/c/",
    "",
    "foo.",
    "foo..",
    ".",
    "..",
    "/",
    "images/",
    "no-dot-here",
    "/a.b/",
]


def _match(constraint, values, key="file", direction=RouteDirection.INCOMING_REQUEST):
    return constraint.match(None, None, key, values, direction)


class TestIsFileName:
    @pytest.mark.parametrize("value", FILE_NAMES)
    def test_file_names(self, value: str) -> None:
        assert is_file_name(value) is True

    @pytest.mark.parametrize("value", NOT_FILE_NAMES)
    def test_not_file_names(self, value: str) -> None:
        assert is_file_name(value) is False

    def test_empty_is_never_a_file_name(self) -> None:
        assert is_file_name("") is False

    def test_only_last_segment_counts(self) -> None:
        assert is_file_name("a.txt/b") is False
        assert is_file_name("a/b.txt") is True

    def test_leading_content_before_slash_is_ignored(self) -> None:
        for value in ("c.txt", "c", "foo.", ".gitignore"):
            assert is_file_name("/x/y/" + value) is is_file_name(value)

    def test_deterministic(self) -> None:
        for value in FILE_NAMES + NOT_FILE_NAMES:
            assert is_file_name(value) == is_file_name(value)

    def test_long_run_of_trailing_dots(self) -> None:
        assert is_file_name("name" + "." * 100_000) is False
        assert is_file_name("name" + "." * 100_000 + "x") is True

    def test_backslash_is_not_a_separator(self) -> None:
        assert is_file_name("dir.d\\file") is True


class TestToInvariantStr:
    def test_str_passthrough(self) -> None:
        value = "report.pdf"
        assert to_invariant_str(value) is value

    def test_int(self) -> None:
        assert to_invariant_str(42) == "42"

    def test_float_uses_dot(self) -> None:
        assert to_invariant_str(1.5) == "1.5"

    def test_decimal(self) -> None:
        assert to_invariant_str(Decimal("3.25")) == "3.25"


class TestFileNameConstraint:
    def test_matching_value(self) -> None:
        assert _match(FileNameConstraint(), {"file": "report.pdf"}) is True

    def test_non_matching_value(self) -> None:
        assert _match(FileNameConstraint(), {"file": "reports/2024"}) is False

    def test_missing_key_is_false(self) -> None:
        assert _match(FileNameConstraint(), {}) is False

    def test_none_value_is_false(self) -> None:
        assert _match(FileNameConstraint(), {"file": None}) is False

    def test_empty_value_is_false(self) -> None:
        assert _match(FileNameConstraint(), {"file": ""}) is False

    def test_non_text_value_is_coerced(self) -> None:
        assert _match(FileNameConstraint(), {"file": 1.5}) is True
        assert _match(FileNameConstraint(), {"file": 15}) is False

    def test_url_generation_direction(self) -> None:
        constraint = FileNameConstraint()
        assert _match(constraint, {"file": "a.txt"}, direction=RouteDirection.URL_GENERATION)

    def test_request_and_router_are_ignored(self) -> None:
        constraint = FileNameConstraint()
        direction = RouteDirection.INCOMING_REQUEST
        assert constraint.match(object(), object(), "f", {"f": "x.js"}, direction)

    def test_missing_route_key_raises(self) -> None:
        with pytest.raises(MissingArgumentError, match="route_key"):
            _match(FileNameConstraint(), {"file": "a.txt"}, key=None)

    def test_missing_values_raises(self) -> None:
        with pytest.raises(MissingArgumentError, match="values"):
            _match(FileNameConstraint(), None)

    def test_missing_argument_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            _match(FileNameConstraint(), None)

    def test_literal_trailing_slash(self) -> None:
        assert FileNameConstraint().match_literal("file", "images/") is False

    def test_literal_file(self) -> None:
        assert FileNameConstraint().match_literal("file", "robots.txt") is True

    @pytest.mark.parametrize("value", FILE_NAMES + NOT_FILE_NAMES)
    def test_literal_and_value_agree(self, value: str) -> None:
        constraint = FileNameConstraint()
        assert constraint.match_literal("file", value) == _match(constraint, {"file": value})


class TestNonFileNameConstraint:
    def test_page_value(self) -> None:
        assert _match(NonFileNameConstraint(), {"file": "docs/intro"}) is True

    def test_file_value(self) -> None:
        assert _match(NonFileNameConstraint(), {"file": "site.css"}) is False

    def test_missing_key_is_true(self) -> None:
        assert _match(NonFileNameConstraint(), {}) is True

    def test_none_value_is_true(self) -> None:
        assert _match(NonFileNameConstraint(), {"file": None}) is True

    def test_missing_values_raises(self) -> None:
        with pytest.raises(MissingArgumentError):
            _match(NonFileNameConstraint(), None)

    @pytest.mark.parametrize("value", FILE_NAMES + NOT_FILE_NAMES)
    def test_inverse_of_file_name(self, value: str) -> None:
        assert NonFileNameConstraint().match_literal("p", value) is not is_file_name(value)
        assert _match(NonFileNameConstraint(), {"file": value}) is not is_file_name(value)


class TestProtocols:
    def test_builtins_are_route_constraints(self) -> None:
        assert isinstance(FileNameConstraint(), RouteConstraint)
        assert isinstance(NonFileNameConstraint(), RouteConstraint)

    def test_builtins_are_literal_constraints(self) -> None:
        assert isinstance(FileNameConstraint(), LiteralConstraint)
        assert isinstance(NonFileNameConstraint(), LiteralConstraint)

    def test_default_registry(self) -> None:
        assert set(DEFAULT_CONSTRAINTS) == {"file", "nonfile"}
        assert isinstance(DEFAULT_CONSTRAINTS["file"], FileNameConstraint)
        assert isinstance(DEFAULT_CONSTRAINTS["nonfile"], NonFileNameConstraint)


class TestEndToEnd:
    def test_value_lookup_report_pdf(self) -> None:
        assert _match(FileNameConstraint(), {"file": "report.pdf"}) is True

    def test_value_lookup_absent_key(self) -> None:
        assert _match(FileNameConstraint(), {"other": "report.pdf"}) is False

    def test_literal_images_trailing_slash(self) -> None:
        assert FileNameConstraint().match_literal("file", "images/") is False
