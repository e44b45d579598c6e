"""Unit tests for path-data parsing and serialization."""

import pytest

from vectorpen.domain import Close, CurveTo, LineTo, MoveTo, format_number, parse, serialize
from vectorpen.exceptions import PathParseError


class TestFormatNumber:
    """Tests for coordinate formatting."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (10.0, "10"),
            (9.9, "9.9"),
            (-3.5, "-3.5"),
            (0.0, "0"),
            (-0.0, "0"),
            (1e-7, "0.0000001"),
            (1e21, "1000000000000000000000"),
        ],
    )
    def test_format(self, value: float, expected: str) -> None:
        """Numbers are written as plain decimals."""
        assert format_number(value) == expected

    def test_round_trips_exactly(self) -> None:
        """The written text parses back to the same float."""
        value = 20.099999999999998
        assert float(format_number(value)) == value

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value: float) -> None:
        """NaN and infinities cannot be written."""
        with pytest.raises(ValueError):
            format_number(value)


class TestSerialize:
    """Tests for command list to text conversion."""

    def test_serialize_all_commands(self) -> None:
        """Each command is its letter followed by its coordinates."""
        commands = [
            MoveTo(10, 10),
            LineTo(100, 10),
            CurveTo(9.9, 0, 20.1, 0, 30, 0),
            Close(),
        ]
        assert serialize(commands) == "M 10 10 L 100 10 C 9.9 0 20.1 0 30 0 Z"

    def test_serialize_empty(self) -> None:
        """An empty list gives empty text."""
        assert serialize([]) == ""


class TestParse:
    """Tests for text to command list conversion."""

    def test_parse_canonical(self) -> None:
        """Canonical text decodes to the expected commands."""
        assert parse("M 10 10 L 100 10 M 100 10") == [
            MoveTo(10, 10),
            LineTo(100, 10),
            MoveTo(100, 10),
        ]

    def test_parse_compact_and_commas(self) -> None:
        """Letters may touch numbers and commas separate values."""
        assert parse("M10,10L20,20C1,2,3,4,5,6Z") == [
            MoveTo(10, 10),
            LineTo(20, 20),
            CurveTo(1, 2, 3, 4, 5, 6),
            Close(),
        ]

    def test_parse_decimals_and_exponents(self) -> None:
        """Signed decimals and exponents are read."""
        assert parse("M -1.5 .5 L 1e2 -2E-1") == [MoveTo(-1.5, 0.5), LineTo(100, -0.2)]

    def test_short_command_dropped(self) -> None:
        """A command short of coordinates is dropped, the rest kept."""
        assert parse("M 10 10 L 20") == [MoveTo(10, 10)]

    def test_surplus_numbers_ignored(self) -> None:
        """Extra numbers in a token do not create implicit commands."""
        assert parse("M 1 2 3 4") == [MoveTo(1, 2)]

    def test_leading_junk_skipped(self) -> None:
        """Text before the first command letter is ignored."""
        assert parse("  ,, M 1 2") == [MoveTo(1, 2)]

    @pytest.mark.parametrize("word", ["abc", "foo", "hat", "Smile"])
    def test_junk_words_skipped(self, word: str) -> None:
        """Words are junk even when they contain path command letters."""
        assert parse(f"M 10 10 {word} L 20 20") == [MoveTo(10, 10), LineTo(20, 20)]

    def test_standalone_relative_command_rejected(self) -> None:
        """A lone lowercase letter touching numbers is still a command."""
        with pytest.raises(PathParseError, match="unsupported command 'l'"):
            parse("M0 0l5 5")

    @pytest.mark.parametrize("text", ["hello", "", "   ", "L 5"])
    def test_no_commands_rejected(self, text: str) -> None:
        """Text that yields no commands is a parse error."""
        with pytest.raises(PathParseError):
            parse(text)

    @pytest.mark.parametrize("text", ["M 0 0 l 5 5", "M 0 0 Q 1 1 2 2", "M 0 0 A 5 5 0 0 1 10 10"])
    def test_unsupported_commands_rejected(self, text: str) -> None:
        """Relative commands, quadratics and arcs are refused."""
        with pytest.raises(PathParseError, match="unsupported command"):
            parse(text)

    def test_error_keeps_text(self) -> None:
        """The parse error carries the offending text."""
        with pytest.raises(PathParseError) as exc_info:
            parse("hello")
        assert exc_info.value.text == "hello"


class TestRoundTrip:
    """Serialization and parsing agree with each other."""

    @pytest.mark.parametrize(
        "commands",
        [
            [MoveTo(0, 0), LineTo(30, 0)],
            [MoveTo(10, 10), CurveTo(9.9, 0.1, 20.1, -3.25, 30, 0), Close()],
            [MoveTo(0.1, 0.2), LineTo(1e-7, 12345.678), MoveTo(5, 5)],
        ],
    )
    def test_parse_inverts_serialize(self, commands) -> None:
        """parse(serialize(cmds)) gives the commands back."""
        assert parse(serialize(commands)) == commands

    @pytest.mark.parametrize("text", ["M10,10 L 100 10", "M 0 0 C 1 2 3 4 5 6 Z", "M1 1L2 2 3"])
    def test_serialize_is_idempotent(self, text: str) -> None:
        """Canonical text survives another parse/serialize pass."""
        once = serialize(parse(text))
        assert serialize(parse(once)) == once
