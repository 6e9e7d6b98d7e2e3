"""Tests for size parsing/formatting and glob matching."""

import re

import pytest

from auxiliary import (
    SIZE_UNITS,
    format_path_for_display,
    format_size,
    format_size_delta,
    match_glob,
    parse_size,
    truncate_path,
)
from bundlesize_errors import BundleSizeError, InvalidSizeFormatError


class TestParseSize:
    """Tests for parse_size."""

    def test_bytes(self):
        assert parse_size("100B") == 100
        assert parse_size("1B") == 1

    def test_kilobytes(self):
        assert parse_size("1KB") == 1024
        assert parse_size("10KB") == 10240

    def test_megabytes_with_decimals(self):
        assert parse_size("1MB") == 1024 * 1024
        assert parse_size("2.5MB") == 2621440

    def test_gigabytes(self):
        assert parse_size("1GB") == 1024**3

    def test_case_insensitive_unit(self):
        assert parse_size("1kb") == 1024
        assert parse_size("2Mb") == 2 * 1024 * 1024

    def test_whitespace_before_unit(self):
        assert parse_size("100 KB") == 100 * 1024

    @pytest.mark.parametrize("value", ["100", "invalid", "KB", "1.KB", "-1KB", "1TB", " 1KB", "1KB ", "", "１００KB", "1\u00a0KB"])
    def test_invalid_format(self, value):
        with pytest.raises(InvalidSizeFormatError, match="Invalid size format"):
            parse_size(value)

    def test_invalid_format_error_types(self):
        with pytest.raises(ValueError):
            parse_size("100")
        with pytest.raises(BundleSizeError):
            parse_size("100")


class TestFormatSize:
    """Tests for format_size."""

    def test_bytes(self):
        assert format_size(0) == "0B"
        assert format_size(100) == "100B"
        assert format_size(1023) == "1023B"

    def test_kilobytes(self):
        assert format_size(1024) == "1.00KB"
        assert format_size(2048) == "2.00KB"
        assert format_size(1536) == "1.50KB"

    def test_megabytes(self):
        assert format_size(1024 * 1024) == "1.00MB"
        assert format_size(2.5 * 1024 * 1024) == "2.50MB"

    def test_gigabytes(self):
        assert format_size(3 * 1024**3) == "3.00GB"

    @pytest.mark.parametrize("size", [0, 1, 999, 1024, 5000, 123456, 7654321, 2 * 1024**3 + 12345])
    def test_parse_recovers_formatted_value(self, size):
        text = format_size(size)
        unit = re.fullmatch(r"[\d.]+([A-Z]+)", text).group(1)
        # Two printed decimals plus int truncation
        assert abs(parse_size(text) - size) <= 0.005 * SIZE_UNITS[unit] + 1


class TestFormatSizeDelta:
    """Tests for signed size deltas."""

    def test_growth(self):
        assert format_size_delta(2048) == "+2.00KB"

    def test_shrink(self):
        assert format_size_delta(-200) == "-200B"

    def test_zero(self):
        assert format_size_delta(0) == "0B"


class TestMatchGlob:
    """Tests for the restricted glob dialect."""

    def test_exact_paths(self):
        assert match_glob("dist/app.js", "dist/app.js") is True
        assert match_glob("dist/app.js", "dist/main.js") is False

    def test_wildcards(self):
        assert match_glob("dist/*.js", "dist/app.js") is True
        assert match_glob("dist/*.js", "dist/main.js") is True
        assert match_glob("dist/*.js", "dist/style.css") is False

    def test_multiple_wildcards(self):
        assert match_glob("dist/*/*.js", "dist/assets/app.js") is True
        assert match_glob("dist/*/*.js", "dist/app.js") is False

    def test_star_crosses_directories(self):
        assert match_glob("dist/*.js", "dist/assets/vendor.js") is True

    def test_star_matches_empty(self):
        assert match_glob("dist/app*.js", "dist/app.js") is True

    def test_question_mark_matches_one_character(self):
        assert match_glob("dist/app.?s", "dist/app.js") is True
        assert match_glob("dist/app.?", "dist/app.js") is False

    def test_anchored(self):
        assert match_glob("app.js", "dist/app.js") is False
        assert match_glob("dist/app", "dist/app.js") is False

    def test_dot_is_literal(self):
        assert match_glob("dist/app.js", "dist/appxjs") is False

    def test_regex_characters_are_literal(self):
        assert match_glob("dist/[name]+(1).js", "dist/[name]+(1).js") is True
        assert match_glob("dist/a+.js", "dist/aa.js") is False
        assert match_glob("dist/{a,b}.js", "dist/a.js") is False


class TestPathDisplay:
    """Tests for path display helpers."""

    def test_truncate_short_path_unchanged(self):
        assert truncate_path("dist/app.js") == "dist/app.js"

    def test_truncate_long_path(self):
        path = "dist/" + "a" * 60 + "/bundle.js"
        result = truncate_path(path, 40)
        assert len(result) == 40
        assert "..." in result
        assert result.startswith("dist/")
        assert result.endswith("bundle.js")

    def test_home_replaced(self):
        assert format_path_for_display("/home/dev/site/dist", "/home/dev") == "~/site/dist"

    def test_other_paths_untouched(self):
        assert format_path_for_display("/home/developer/x", "/home/dev") == "/home/developer/x"
