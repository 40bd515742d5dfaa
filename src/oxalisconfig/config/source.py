"""Loads raw key/value pairs from a properties file or byte stream.

The text format is the classic Java properties syntax:

    # comment            ! also a comment
    key=value            key: value            key value
    long.value=first \\
               second

Escapes \\t \\n \\r \\f and \\uXXXX are understood; any other escaped
character stands for itself.
"""

import logging
import os
import re
from pathlib import Path
from typing import BinaryIO, Mapping, Optional, Union

from ..errors import ConfigCloseError, ConfigNotFoundError, ConfigReadError

logger = logging.getLogger(__name__)

ConfigSource = Union[str, Path, BinaryIO]

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_SIMPLE_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _has_continuation(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str):
    """Yield logical lines with comments, blanks and continuations resolved."""
    pending: Optional[str] = None
    for natural in _LINE_BREAK.split(text):
        line = natural.lstrip(_WHITESPACE)
        if pending is None:
            if not line or line[0] in "#!":
                continue
            pending = ""
        if _has_continuation(line):
            pending += line[:-1]
            continue
        yield pending + line
        pending = None
    if pending:
        yield pending


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into its still-escaped key and value."""
    length = len(line)
    key_end = length
    value_start = length
    has_separator = False
    preceding_backslash = False

    for index, char in enumerate(line):
        if not preceding_backslash and char in _SEPARATORS:
            key_end, value_start, has_separator = index, index + 1, True
            break
        if not preceding_backslash and char in _WHITESPACE:
            key_end, value_start = index, index + 1
            break
        preceding_backslash = char == "\\" and not preceding_backslash

    while value_start < length:
        char = line[value_start]
        if char not in _WHITESPACE:
            if not has_separator and char in _SEPARATORS:
                has_separator = True
            else:
                break
        value_start += 1

    return line[:key_end], line[value_start:]


def _unescape(raw: str) -> str:
    out: list[str] = []
    index = 0
    length = len(raw)
    while index < length:
        char = raw[index]
        index += 1
        if char != "\\":
            out.append(char)
            continue
        if index >= length:
            break
        char = raw[index]
        index += 1
        if char == "u":
            digits = raw[index:index + 4]
            if len(digits) != 4 or not _HEX_DIGITS.issuperset(digits):
                raise ConfigReadError(f"Malformed \\uxxxx encoding: \\u{digits}")
            out.append(chr(int(digits, 16)))
            index += 4
        else:
            out.append(_SIMPLE_ESCAPES.get(char, char))
    # Join UTF-16 surrogate pairs written as two \u escapes
    return "".join(out).encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties text. Later duplicates override earlier ones.

    Raises:
        ConfigReadError: On a malformed \\uXXXX escape.
    """
    entries: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        entries[_unescape(key)] = _unescape(value)
    return entries


class ConfigurationSource:
    """Layers the contents of a properties file or stream over defaults."""

    def load(
        self,
        defaults: Mapping[str, Optional[str]],
        source: ConfigSource,
    ) -> dict[str, Optional[str]]:
        """Return defaults overridden by every pair found in the source.

        Keys outside the property catalog are kept as-is. The defaults
        mapping is never modified.

        Args:
            defaults: Base layer, usually the catalog defaults
            source: Path of a properties file, or a binary stream the
                caller owns (it is read but not closed)

        Raises:
            ConfigNotFoundError: The file is missing or unreadable.
            ConfigReadError: The bytes could not be read or decoded.
            ConfigCloseError: The file could not be closed after a
                successful read.
        """
        properties = dict(defaults)
        if hasattr(source, "read"):
            entries = self._read_stream(source, "input stream")
        else:
            entries = self._read_file(Path(source))
        properties.update(entries)
        return properties

    def _open(self, path: Path) -> BinaryIO:
        return path.open("rb")

    def _read_file(self, path: Path) -> dict[str, str]:
        logger.debug(f"Loading configuration properties from {path.absolute()}")

        if not path.is_file() or not os.access(path, os.R_OK):
            logger.error(f"Unable to load the global configuration from {path.absolute()}")
            raise ConfigNotFoundError(path)

        try:
            handle = self._open(path)
        except OSError as e:
            raise ConfigNotFoundError(path) from e

        try:
            entries = self._read_stream(handle, str(path))
        except BaseException:
            try:
                handle.close()
            except OSError as close_error:
                logger.warning(f"Unable to close {path} after failed load: {close_error}")
            raise

        try:
            handle.close()
        except OSError as e:
            raise ConfigCloseError(f"Unable to close file {path.absolute()}") from e
        return entries

    def _read_stream(self, stream: BinaryIO, origin: str) -> dict[str, str]:
        try:
            data = stream.read()
        except OSError as e:
            raise ConfigReadError(f"Unable to read from {origin}; {e}") from e

        if isinstance(data, str):
            text = data
        else:
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ConfigReadError(f"Unable to decode {origin} as UTF-8; {e}") from e
        return parse_properties(text)
