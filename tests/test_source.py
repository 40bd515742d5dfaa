"""Tests for property parsing and ConfigurationSource."""

import io
from unittest.mock import MagicMock, patch

import pytest

from oxalisconfig.config.source import ConfigurationSource, parse_properties
from oxalisconfig.errors import ConfigCloseError, ConfigNotFoundError, ConfigReadError


class TestParseProperties:
    """Tests for the properties text format."""

    def test_separators(self):
        """'=', ':' and whitespace all separate key from value."""
        entries = parse_properties("a=1\nb:2\nc 3\nd = 4\ne : 5\n")

        assert entries == {"a": "1", "b": "2", "c": "3", "d": "4", "e": "5"}

    def test_comments_and_blank_lines(self):
        """Lines starting with # or ! are ignored, as are blank lines."""
        entries = parse_properties("# comment\n   ! another\n\n   \nkey=value\n")

        assert entries == {"key": "value"}

    def test_empty_value(self):
        """A key with no value maps to the empty string."""
        entries = parse_properties("empty=\nbare\n")

        assert entries == {"empty": "", "bare": ""}

    def test_value_keeps_separators_and_trailing_text(self):
        """Only the first separator splits; the rest belongs to the value."""
        entries = parse_properties("url=jdbc:mysql://host:3306/db?a=b\n")

        assert entries["url"] == "jdbc:mysql://host:3306/db?a=b"

    def test_line_continuation(self):
        """A trailing backslash joins the next line, dropping its indent."""
        entries = parse_properties("list=one, \\\n      two, \\\n      three\n")

        assert entries["list"] == "one, two, three"

    def test_even_backslashes_do_not_continue(self):
        """An escaped backslash at end of line is a literal backslash."""
        entries = parse_properties("path=C:\\\\\nnext=1\n")

        assert entries == {"path": "C:\\", "next": "1"}

    def test_comment_line_is_not_continued(self):
        """A comment ending in a backslash does not swallow the next line."""
        entries = parse_properties("# comment \\\nkey=value\n")

        assert entries == {"key": "value"}

    def test_escapes(self):
        """Standard escapes are decoded in keys and values."""
        entries = parse_properties("my\\ key=tab\\there\\nnewline\nsep\\=key=\\u00e6\\u00f8\\u00e5\n")

        assert entries["my key"] == "tab\there\nnewline"
        assert entries["sep=key"] == "æøå"

    def test_surrogate_pair_escape(self):
        """Two \\u escapes forming a surrogate pair give one character."""
        entries = parse_properties("smile=\\ud83d\\ude00\n")

        assert entries["smile"] == "\U0001F600"

    def test_malformed_unicode_escape(self):
        """A broken \\u escape is a read error."""
        with pytest.raises(ConfigReadError):
            parse_properties("bad=\\u12G4\n")

    def test_line_endings(self):
        """CR, LF and CRLF all end a line."""
        entries = parse_properties("a=1\rb=2\r\nc=3")

        assert entries == {"a": "1", "b": "2", "c": "3"}

    def test_last_duplicate_wins(self):
        """A repeated key keeps its last value."""
        entries = parse_properties("a=1\na=2\n")

        assert entries == {"a": "2"}


class TestLoadFromStream:
    """Tests for loading from a byte stream."""

    def test_layers_over_defaults(self):
        """Stream values override defaults; others keep their default."""
        defaults = {"a": "default-a", "b": "default-b", "c": None}

        result = ConfigurationSource().load(defaults, io.BytesIO(b"a=from-stream\n"))

        assert result == {"a": "from-stream", "b": "default-b", "c": None}

    def test_defaults_not_mutated(self):
        """The defaults mapping is left untouched."""
        defaults = {"a": "default-a"}

        ConfigurationSource().load(defaults, io.BytesIO(b"a=changed\n"))

        assert defaults == {"a": "default-a"}

    def test_unknown_keys_are_preserved(self):
        """Keys outside the catalog are kept rather than rejected."""
        result = ConfigurationSource().load({}, io.BytesIO(b"some.future.key=42\n"))

        assert result["some.future.key"] == "42"

    def test_utf8_decoding(self):
        """Bytes are decoded as UTF-8."""
        result = ConfigurationSource().load({}, io.BytesIO("name=Bjørn\n".encode("utf-8")))

        assert result["name"] == "Bjørn"

    def test_invalid_utf8(self):
        """Undecodable bytes raise ConfigReadError."""
        with pytest.raises(ConfigReadError):
            ConfigurationSource().load({}, io.BytesIO(b"name=\xff\xfe\n"))

    def test_read_failure(self):
        """An OSError while reading raises ConfigReadError."""
        stream = MagicMock()
        stream.read.side_effect = OSError("disk gone")

        with pytest.raises(ConfigReadError, match="disk gone"):
            ConfigurationSource().load({}, stream)

    def test_caller_stream_is_not_closed(self):
        """Streams supplied by the caller stay open."""
        stream = io.BytesIO(b"a=1\n")

        ConfigurationSource().load({}, stream)

        assert not stream.closed


class TestLoadFromFile:
    """Tests for loading from a file."""

    def test_load_file(self, tmp_path):
        """Values from the file override defaults."""
        path = tmp_path / "oxalis-global.properties"
        path.write_text("a=file\n", encoding="utf-8")

        result = ConfigurationSource().load({"a": "default", "b": "kept"}, path)

        assert result == {"a": "file", "b": "kept"}

    def test_accepts_string_path(self, tmp_path):
        """A str path works like a Path."""
        path = tmp_path / "x.properties"
        path.write_text("a=1\n", encoding="utf-8")

        assert ConfigurationSource().load({}, str(path)) == {"a": "1"}

    def test_missing_file(self, tmp_path):
        """A missing file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError) as excinfo:
            ConfigurationSource().load({}, tmp_path / "nope.properties")

        assert excinfo.value.path == tmp_path / "nope.properties"

    def test_directory_is_not_a_file(self, tmp_path):
        """A directory is rejected like a missing file."""
        with pytest.raises(ConfigNotFoundError):
            ConfigurationSource().load({}, tmp_path)

    def test_handle_closed_after_parse_failure(self, tmp_path):
        """The file handle is closed even when decoding fails."""
        path = tmp_path / "broken.properties"
        path.write_bytes(b"a=\xff\n")
        handle = MagicMock()
        handle.read.return_value = b"a=\xff\n"

        with patch.object(ConfigurationSource, "_open", return_value=handle):
            with pytest.raises(ConfigReadError):
                ConfigurationSource().load({}, path)

        handle.close.assert_called_once()

    def test_close_failure_after_success(self, tmp_path):
        """A close failure after a good read raises ConfigCloseError."""
        path = tmp_path / "ok.properties"
        path.write_bytes(b"a=1\n")
        handle = MagicMock()
        handle.read.return_value = b"a=1\n"
        handle.close.side_effect = OSError("close failed")

        with patch.object(ConfigurationSource, "_open", return_value=handle):
            with pytest.raises(ConfigCloseError):
                ConfigurationSource().load({}, path)

    def test_close_failure_does_not_mask_read_error(self, tmp_path):
        """When reading already failed, that error wins over the close error."""
        path = tmp_path / "bad.properties"
        path.write_bytes(b"a=1\n")
        handle = MagicMock()
        handle.read.side_effect = OSError("read failed")
        handle.close.side_effect = OSError("close failed")

        with patch.object(ConfigurationSource, "_open", return_value=handle):
            with pytest.raises(ConfigReadError, match="read failed"):
                ConfigurationSource().load({}, path)
