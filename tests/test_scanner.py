"""
Tests for the option table and argument scanner.
"""

import pytest

from launchopts.errors import HelpRequested, VersionRequested
from launchopts.options import ArgumentScanner, OptionDescriptor, OptionTable, render_usage


class TestPassThrough:
    """Tokens that are not launcher options."""

    def test_no_options_unchanged(self, scanner, calls):
        """A line without option-like tokens is left alone."""
        tokens = ["app.exe", "one", "two"]
        assert scanner.scan(tokens) == ["app.exe", "one", "two"]
        assert calls == []

    def test_empty_line(self, scanner, calls):
        assert scanner.scan([]) == []
        assert calls == []

    def test_unknown_option_kept(self, scanner, calls):
        """Unknown options stay for the final check; scanning goes on."""
        assert scanner.scan(["-x", "--managed", "--bogus"]) == ["-x", "--bogus"]
        assert calls == [("managed", "")]

    def test_separator_stops_scanning(self, scanner, calls):
        """Everything from a bare -- on belongs to the application."""
        tokens = ["--managed", "--", "--winver", "win95"]
        assert scanner.scan(tokens) == ["--", "--winver", "win95"]
        assert calls == [("managed", "")]

    def test_lone_dash_kept(self, scanner, calls):
        assert scanner.scan(["-"]) == ["-"]
        assert calls == []

    def test_triple_dash_not_matched(self, scanner, calls):
        assert scanner.scan(["---managed"]) == ["---managed"]
        assert calls == []

    def test_input_not_mutated(self, scanner):
        tokens = ["--managed", "app.exe"]
        scanner.scan(tokens)
        assert tokens == ["--managed", "app.exe"]


class TestFlags:
    """Options without values."""

    def test_managed(self, scanner, calls):
        assert scanner.scan(["--managed"]) == []
        assert calls == [("managed", "")]

    def test_single_dash_long_name(self, scanner, calls):
        assert scanner.scan(["-managed", "app.exe"]) == ["app.exe"]
        assert calls == [("managed", "")]

    def test_flag_with_inline_value_not_matched(self, scanner, calls):
        """name=value only matches options that take a value."""
        assert scanner.scan(["--managed=yes"]) == ["--managed=yes"]
        assert calls == []

    def test_short_help(self, scanner, calls):
        with pytest.raises(HelpRequested) as exc:
            scanner.scan(["-h"])
        assert exc.value.exit_code == 0
        assert calls == [("help", "")]

    def test_short_version(self, scanner):
        with pytest.raises(VersionRequested) as exc:
            scanner.scan(["app.exe", "-v"])
        assert exc.value.release == "test release"

    def test_unknown_short(self, scanner, calls):
        assert scanner.scan(["-q"]) == ["-q"]
        assert calls == []


class TestValues:
    """Options that take a value."""

    def test_inline_value(self, scanner, calls):
        assert scanner.scan(["--winver=win95", "app.exe"]) == ["app.exe"]
        assert calls == [("winver", "win95")]

    def test_separate_value(self, scanner, calls, accumulator):
        assert scanner.scan(["--dll", "foo", "app.exe"]) == ["app.exe"]
        assert calls == [("dll", "foo")]
        assert accumulator.flush() == "--dll foo"

    def test_inline_value_splits_at_first_equals(self, scanner, calls):
        assert scanner.scan(["--dll=comdlg32=n,b"]) == []
        assert calls == [("dll", "comdlg32=n,b")]

    def test_empty_inline_value(self, scanner, calls):
        assert scanner.scan(["--dll=", "app.exe"]) == ["app.exe"]
        assert calls == [("dll", "")]

    def test_missing_value_defaults_to_empty(self, scanner, calls, accumulator):
        assert scanner.scan(["--dll"]) == []
        assert calls == [("dll", "")]
        assert accumulator.flush() == "--dll="

    def test_value_token_taken_verbatim(self, scanner, calls):
        """The token after a value-taking option is its value, even if it looks like an option."""
        assert scanner.scan(["--dll", "--managed"]) == []
        assert calls == [("dll", "--managed")]

    def test_single_dash_with_inline_value(self, scanner, calls):
        assert scanner.scan(["-winver=nt40"]) == []
        assert calls == [("winver", "nt40")]

    def test_unknown_name_with_value(self, scanner, calls):
        assert scanner.scan(["--colour=red"]) == ["--colour=red"]
        assert calls == []


class TestOrdering:
    """Handlers run in token order; consumed tokens leave no gaps."""

    def test_handlers_in_token_order(self, scanner, calls):
        tokens = ["--winver", "nt40", "app.exe", "--dll=a=n", "--managed", "arg"]
        assert scanner.scan(tokens) == ["app.exe", "arg"]
        assert calls == [("winver", "nt40"), ("dll", "a=n"), ("managed", "")]

    def test_adjacent_options(self, scanner, calls):
        """The token that moves into a removed option's place is examined too."""
        assert scanner.scan(["--managed", "--managed", "--dosver", "6.22"]) == []
        assert calls == [("managed", ""), ("managed", ""), ("dosver", "6.22")]

    def test_handler_error_stops_scan(self, scanner, calls, accumulator):
        with pytest.raises(HelpRequested):
            scanner.scan(["--winver", "win95", "--help", "--dll", "x"])
        assert calls == [("winver", "win95"), ("help", "")]
        assert accumulator.flush() == "--winver win95"

    def test_non_inheritable_not_folded(self, scanner, accumulator):
        scanner.scan(["--managed", "app.exe"])
        assert accumulator.flush() is None


class TestTable:
    """Option table lookups and usage text."""

    def test_first_exact_match_wins(self):
        seen = []
        table = OptionTable([
            OptionDescriptor("dll", lambda v: seen.append(("first", v)), "", takes_value=True),
            OptionDescriptor("dll", lambda v: seen.append(("second", v)), "", takes_value=True),
        ])
        ArgumentScanner(table).scan(["--dll=x"])
        assert seen == [("first", "x")]

    def test_find_long(self, table):
        descriptor, inline = table.find_long("winver=win31")
        assert descriptor.long_name == "winver"
        assert inline == "win31"
        descriptor, inline = table.find_long("managed")
        assert descriptor.long_name == "managed"
        assert inline is None

    def test_short_name_must_be_one_char(self):
        with pytest.raises(ValueError):
            OptionDescriptor("help", lambda v: None, "", short_name="hh")

    def test_render_usage(self, table):
        text = render_usage(table, "wine", "test release")
        lines = text.splitlines()
        assert lines[0] == "test release"
        assert lines[2] == "Usage: wine [options] [--] program_name [arguments]"
        assert "Options:" in lines
        assert "   --help,-h" in lines
        assert len(table) == 7
