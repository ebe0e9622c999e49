#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_text_parser.py
"""Unit tests for the configuration text parser.

Tests cover:
- Sections, settings and value trimming
- Trailing comments and pre-comment attachment
- Quoted values and escaped delimiters
- Line-numbered errors for every grammar violation
- Duplicate detection under both case policies
- The implicit global section
- Line terminators, input types and encodings
- Progress events

"""

from io import BytesIO, StringIO
from pathlib import Path

import pytest

from sectionconf.exceptions import FileNotFoundError, InvalidOptionsError, ParsingError, ValidationError
from sectionconf.model import Comment
from sectionconf.options import ConfigurationOptions, TextParserOptions, TextRendererOptions
from sectionconf.parsers.text import TextParser, parse_text, split_lines


def _parser(**config_kwargs) -> TextParser:
    return TextParser(TextParserOptions(configuration=ConfigurationOptions(**config_kwargs)))


@pytest.mark.unit
class TestBasicParsing:
    """Tests for sections and settings."""

    def test_parse_simple(self) -> None:
        """Test a section with two settings."""
        config = TextParser().parse("[server]\nhost = localhost\nport = 8080")
        assert config.to_dict() == {"server": {"host": "localhost", "port": "8080"}}

    def test_parse_multiple_sections_in_order(self) -> None:
        """Test sections and settings keep declaration order."""
        config = parse_text("[B]\nz = 1\ny = 2\n\n[A]\nx = 3\n")
        assert [section.name for section in config] == ["B", "A"]
        assert [setting.name for setting in config["B"]] == ["z", "y"]

    def test_empty_input(self) -> None:
        """Test empty and blank input yield an empty configuration."""
        assert TextParser().parse("").section_count == 0
        assert TextParser().parse("\n   \n\t\n").section_count == 0

    def test_whitespace_is_trimmed(self) -> None:
        """Test surrounding whitespace on lines, names and values is removed."""
        config = parse_text("   [ Server ]   \n   Port   =   8080   ")
        assert config.get("Server").get("Port").value == "8080"

    def test_value_may_contain_assignment(self) -> None:
        """Test only the first '=' separates name and value."""
        config = parse_text("[A]\nurl = a=b=c")
        assert config["A"]["url"].value == "a=b=c"

    def test_empty_value(self) -> None:
        """Test a setting without a value."""
        config = parse_text("[A]\nx =")
        assert config["A"]["x"].value == ""

    def test_quotes_are_stripped(self) -> None:
        """Test surrounding quote marks are removed from values."""
        config = parse_text('[A]\nx = "quoted value"\ny = ""\nz = "a"b"')
        assert config["A"].to_dict() == {"x": "quoted value", "y": "", "z": 'a"b'}

    def test_quoted_delimiter_is_part_of_value(self) -> None:
        """Test a delimiter between quotes does not start a comment."""
        config = parse_text('[Server]\nHost = "local;host"')
        host = config["Server"]["Host"]
        assert host.value == "local;host"
        assert host.comment is None

    def test_apostrophe_starts_comment_by_default(self) -> None:
        """Test the default delimiter set includes the apostrophe."""
        config = parse_text("[A]\nName = O'Brien")
        name = config["A"]["Name"]
        assert name.value == "O"
        assert name.comment == Comment("'", "Brien")

    def test_custom_comment_chars(self) -> None:
        """Test characters outside the delimiter set are plain text."""
        config = _parser(comment_chars=("#",)).parse("[A]\nName = O'Brien; Jr # note")
        name = config["A"]["Name"]
        assert name.value == "O'Brien; Jr"
        assert name.comment == Comment("#", "note")

    def test_unicode_line_separator_is_not_a_line_break(self) -> None:
        """Test only CR and LF split lines."""
        config = parse_text("[A]\nx = a\u2028b")
        assert config["A"]["x"].value == "a\u2028b"


@pytest.mark.unit
class TestCommentAttachment:
    """Tests for trailing comments and pre-comments."""

    def test_section_trailing_comment(self) -> None:
        """Test a comment after a header belongs to the section."""
        config = parse_text("[Server] ; main")
        assert config["Server"].comment == Comment(";", "main")

    def test_setting_trailing_comment(self) -> None:
        """Test a comment after a setting belongs to the setting."""
        config = parse_text("[A]\nPort = 8080 # default")
        port = config["A"]["Port"]
        assert port.value == "8080"
        assert port.comment == Comment("#", "default")

    def test_pre_comment_on_setting(self) -> None:
        """Test a comment line attaches to the following setting."""
        config = parse_text("[Server]\n; Listen port\nPort = 8080\n")
        server = config["Server"]
        assert server.setting_count == 1
        assert server["Port"].value == "8080"
        assert server["Port"].pre_comments == [Comment(";", "Listen port")]
        assert server.pre_comments == []

    def test_pre_comments_on_section(self) -> None:
        """Test consecutive comment lines all attach to the next header."""
        config = parse_text("# first\n\n; second\n[A]\nx = 1")
        assert config["A"].pre_comments == [Comment("#", "first"), Comment(";", "second")]
        assert config["A"]["x"].pre_comments == []

    def test_trailing_pre_comments_dropped(self) -> None:
        """Test comment lines at the end of input attach to nothing."""
        config = parse_text("[A]\nx = 1\n; dangling")
        assert config["A"]["x"].pre_comments == []
        assert config["A"]["x"].comment is None

    def test_empty_comment_line(self) -> None:
        """Test a bare delimiter line is an empty pre-comment."""
        config = parse_text("[A]\n;\nx = 1")
        assert config["A"]["x"].pre_comments == [Comment(";", "")]


@pytest.mark.unit
class TestEscapedDelimiters:
    """Tests for backslash-escaped comment delimiters."""

    def test_escape_kept_by_default(self) -> None:
        """Test the escaped delimiter and its backslash stay in the raw value."""
        config = parse_text("[A]\n" + r"Path = C:\temp \; notacomment")
        path = config["A"]["Path"]
        assert path.value == r"C:\temp \; notacomment"
        assert path.comment is None

    def test_escape_stripped_when_enabled(self) -> None:
        """Test strip_escapes removes the backslash in front of delimiters."""
        parser = TextParser(TextParserOptions(strip_escapes=True))
        config = parser.parse("[A]\n" + r"Path = C:\temp \; notacomment")
        assert config["A"]["Path"].value == r"C:\temp ; notacomment"

    def test_escape_stripped_in_names(self) -> None:
        """Test escape removal also applies to section names."""
        text = "[a\\;b]\nx = 1"
        assert parse_text(text).get("a\\;b") is not None
        assert TextParser(TextParserOptions(strip_escapes=True)).parse(text).get("a;b") is not None


@pytest.mark.unit
class TestParsingErrors:
    """Tests for grammar violations."""

    @pytest.mark.parametrize(
        "text,line_number,reason",
        [
            ("[A", 1, "closing bracket missing."),
            ("[A] extra", 1, "unexpected token 'extra'"),
            ("[]", 1, "section name expected."),
            ("[   ]", 1, "section name expected."),
            ("[A]\njunk", 2, "setting assignment expected."),
            ("[A]\n = 5", 2, "setting name expected."),
            ("x = 1\n[A]\n", 1, "The setting 'x' has to be in a section."),
            ("[A]\n[A]\n", 2, "The section 'A' was already declared in the configuration."),
            ("[A]\nx = 1\n\nx = 2", 4, "The setting 'x' was already declared in the section."),
        ],
    )
    def test_error_reports_line(self, text: str, line_number: int, reason: str) -> None:
        """Test each violation reports its reason and 1-based line."""
        with pytest.raises(ParsingError) as exc_info:
            parse_text(text)
        assert exc_info.value.line_number == line_number
        assert exc_info.value.reason == reason
        assert str(exc_info.value) == f"{reason} (line {line_number})"

    def test_duplicate_section_names_section(self) -> None:
        """Test a duplicate header error identifies the section."""
        with pytest.raises(ParsingError) as exc_info:
            parse_text("[A]\n[A]\n")
        assert "'A'" in str(exc_info.value)
        assert exc_info.value.line_number == 2

    def test_same_setting_in_different_sections(self) -> None:
        """Test duplicate detection is per section."""
        config = parse_text("[A]\nx = 1\n[B]\nx = 2")
        assert config["A"]["x"].value == "1"
        assert config["B"]["x"].value == "2"

    def test_case_variants_allowed_when_sensitive(self) -> None:
        """Test case variants are distinct names by default."""
        config = parse_text("[A]\nx = 1\nX = 2\n[a]")
        assert [section.name for section in config] == ["A", "a"]
        assert config["A"].setting_count == 2

    def test_case_variants_rejected_when_insensitive(self) -> None:
        """Test case variants collide under an insensitive policy."""
        with pytest.raises(ParsingError) as exc_info:
            _parser(case_sensitive=False).parse("[A]\n[a]")
        assert exc_info.value.line_number == 2

        with pytest.raises(ParsingError) as exc_info:
            _parser(case_sensitive=False).parse("[A]\nPort = 1\nport = 2")
        assert exc_info.value.line_number == 3

    def test_error_after_comment_lines(self) -> None:
        """Test comment and blank lines count toward the line number."""
        with pytest.raises(ParsingError) as exc_info:
            parse_text("; header\n\n[A]\n# note\nbroken")
        assert exc_info.value.line_number == 5


@pytest.mark.unit
class TestImplicitSection:
    """Tests for settings declared before the first header."""

    def test_settings_go_to_global_section(self, implicit_options: ConfigurationOptions) -> None:
        """Test leading settings land in the global section."""
        parser = TextParser(TextParserOptions(configuration=implicit_options))
        config = parser.parse("debug = true\n[A]\nx = 1")
        assert config.global_section.to_dict() == {"debug": "true"}
        assert [section.name for section in config] == ["General", "A"]

    def test_global_section_present_without_settings(self, implicit_options: ConfigurationOptions) -> None:
        """Test the global section exists even when nothing precedes the first header."""
        config = TextParser(TextParserOptions(configuration=implicit_options)).parse("[A]\nx = 1")
        assert config.global_section is not None
        assert config.global_section.setting_count == 0

    def test_explicit_global_header_is_duplicate(self, implicit_options: ConfigurationOptions) -> None:
        """Test a header naming the global section collides with it."""
        parser = TextParser(TextParserOptions(configuration=implicit_options))
        with pytest.raises(ParsingError) as exc_info:
            parser.parse("[General]\nx = 1")
        assert exc_info.value.line_number == 1

    def test_duplicate_global_setting(self, implicit_options: ConfigurationOptions) -> None:
        """Test duplicate detection applies to the global section."""
        parser = TextParser(TextParserOptions(configuration=implicit_options))
        with pytest.raises(ParsingError) as exc_info:
            parser.parse("x = 1\nx = 2")
        assert exc_info.value.line_number == 2

    def test_policy_carried_by_result(self) -> None:
        """Test the parsed configuration holds the parser's policy."""
        options = ConfigurationOptions(case_sensitive=False)
        config = TextParser(TextParserOptions(configuration=options)).parse("[Server]\nPort = 1")
        assert config.options is options
        assert config["SERVER"]["PORT"].value == "1"


@pytest.mark.unit
class TestLineTerminators:
    """Tests for line splitting."""

    def test_mixed_terminators(self) -> None:
        """Test CRLF, CR and LF all end a line."""
        config = parse_text("[A]\r\nx = 1\ry = 2\nz = 3")
        assert config["A"].to_dict() == {"x": "1", "y": "2", "z": "3"}

    def test_split_lines(self) -> None:
        """Test a trailing terminator does not add an empty line."""
        assert split_lines("a\r\nb\rc\n") == ["a", "b", "c"]
        assert split_lines("a\n\nb") == ["a", "", "b"]
        assert split_lines("") == []

    def test_crlf_line_numbers(self) -> None:
        """Test CRLF counts as a single line break."""
        with pytest.raises(ParsingError) as exc_info:
            parse_text("[A]\r\n\r\nbroken")
        assert exc_info.value.line_number == 3


@pytest.mark.unit
class TestInputTypes:
    """Tests for the accepted input types."""

    def test_parse_from_path(self, tmp_path: Path) -> None:
        """Test parsing a file given as a Path."""
        config_file = tmp_path / "app.ini"
        config_file.write_bytes(b"[section]\nkey = value\n")
        config = TextParser().parse(config_file)
        assert config["section"]["key"].value == "value"

    def test_missing_path(self, tmp_path: Path) -> None:
        """Test a missing file raises the library's FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            TextParser().parse(tmp_path / "missing.ini")

    def test_parse_bytes_and_streams(self) -> None:
        """Test bytes, binary streams and text streams."""
        assert TextParser().parse(b"[A]\nx = 1")["A"]["x"].value == "1"
        assert TextParser().parse(BytesIO(b"[A]\nx = 2"))["A"]["x"].value == "2"
        assert TextParser().parse(StringIO("[A]\nx = 3"))["A"]["x"].value == "3"

    def test_utf8_bom_removed(self) -> None:
        """Test a byte order mark does not become part of the first name."""
        config = TextParser().parse("\ufeff[A]\nx = 1".encode("utf-8"))
        assert config.get("A") is not None

    def test_explicit_encoding(self) -> None:
        """Test the configured encoding decodes byte input."""
        data = "[A]\nname = café".encode("latin-1")
        config = TextParser(TextParserOptions(encoding="latin-1")).parse(data)
        assert config["A"]["name"].value == "café"

    def test_undecodable_bytes(self) -> None:
        """Test decode failures surface as ParsingError."""
        with pytest.raises(ParsingError):
            TextParser(TextParserOptions(encoding="utf-8")).parse(b"[A]\nx = \xff\xfe")

    def test_unknown_encoding(self) -> None:
        """Test an unknown codec name surfaces as ParsingError."""
        with pytest.raises(ParsingError):
            TextParser(TextParserOptions(encoding="no-such-codec")).parse(b"[A]")

    def test_unsupported_input(self) -> None:
        """Test unsupported input types are rejected."""
        with pytest.raises(ValidationError):
            TextParser().parse(12345)  # type: ignore[arg-type]

    def test_wrong_options_type(self) -> None:
        """Test the parser rejects renderer options."""
        with pytest.raises(InvalidOptionsError):
            TextParser(TextRendererOptions())  # type: ignore[arg-type]


@pytest.mark.unit
class TestProgressEvents:
    """Tests for progress reporting."""

    def test_event_sequence(self) -> None:
        """Test started, one item per section, then finished."""
        events = []
        TextParser(progress_callback=events.append).parse("[A]\nx = 1\n[B]\ny = 2")

        assert [event.event_type for event in events] == ["started", "item_done", "item_done", "finished"]
        assert events[0].total == 4
        assert [event.metadata["name"] for event in events[1:3]] == ["A", "B"]
        assert events[-1].current == events[-1].total == 4

    def test_error_event(self) -> None:
        """Test a failing parse reports an error event."""
        events = []
        with pytest.raises(ParsingError):
            TextParser(progress_callback=events.append).parse("[A]\n[A]")
        assert events[-1].event_type == "error"
        assert "already declared" in events[-1].metadata["error"]

    def test_failing_callback_does_not_abort(self) -> None:
        """Test callback exceptions are logged, not raised."""

        def explode(event) -> None:
            raise RuntimeError("observer failure")

        config = TextParser(progress_callback=explode).parse("[A]\nx = 1")
        assert config["A"]["x"].value == "1"
