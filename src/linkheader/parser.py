"""Parser for the value of an :rfc:`8288` ``Link`` header.

The value of a ``Link`` header is a comma-separated list of link entries. Each
entry is a reference in angle brackets followed by zero or more parameters,
each introduced by a semicolon:

.. code-block:: text

   <https://example.com/2>; rel="next", <https://example.com/1>; rel=prev

Parameter values may be quoted strings or, using the extended syntax from
:rfc:`2231` and :rfc:`5987`, percent-encoded text carrying its own character
set and language (``title*=UTF-8'en'%E2%9C%93``).

Parsing is best effort inside a link entry. A parameter that cannot be
understood is kept in its raw form rather than rejected. Only an entry that
has no recognizable reference raises an exception.
"""

from __future__ import annotations

import re
from urllib.parse import unquote_to_bytes

from structlog.stdlib import BoundLogger, get_logger

from .config import ParserConfig
from .constants import DEFAULT_ENCODING, DEFAULT_LANGUAGE, ROOT_LOGGER
from .exceptions import MalformedHeaderError
from .models import Link, LinkParam, Links

__all__ = [
    "LinkHeaderParser",
    "parse_link_header",
    "parse_link_param",
    "parse_link_params",
]

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
"""Matches a ``%`` that does not start a valid percent-encoded octet."""

_QUOTED_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"', re.DOTALL)
"""Matches a complete quoted-string, capturing the text inside the quotes."""

_QUOTED_PAIR = re.compile(r"\\(.)", re.DOTALL)
"""Matches a backslash escape inside a quoted-string."""

_ENTRY_SEPARATORS = frozenset(", \t\r\n")
"""Characters that may appear between link entries."""


class LinkHeaderParser:
    """Parse ``Link`` header values using a fixed configuration.

    The parser holds no state other than its configuration and logger, so a
    single instance may be shared freely.

    Parameters
    ----------
    config
        Parser configuration. If not given, it is built from the environment.
    logger
        Logger to use. If not given, the ``linkheader`` logger is used.
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._config = config if config is not None else ParserConfig()
        self._logger = logger or get_logger(ROOT_LOGGER)

    def parse(self, header: str) -> Links:
        """Parse the value of a ``Link`` header.

        Parameters
        ----------
        header
            Value of the header, without the ``Link:`` prefix.

        Returns
        -------
        Links
            Parsed links in the order they appear in the header.

        Raises
        ------
        MalformedHeaderError
            Raised if a link entry does not have a ``<...>`` reference.
        """
        return parse_link_header(
            header,
            default_encoding=self._config.default_encoding,
            default_language=self._config.default_language,
            logger=self._logger,
        )


def parse_link_header(
    header: str,
    *,
    default_encoding: str = DEFAULT_ENCODING,
    default_language: str = DEFAULT_LANGUAGE,
    logger: BoundLogger | None = None,
) -> Links:
    """Parse the value of a ``Link`` header.

    Parameters
    ----------
    header
        Value of the header, without the ``Link:`` prefix.
    default_encoding
        Encoding recorded for parameters that do not declare one.
    default_language
        Language recorded for parameters that do not declare one.
    logger
        Logger for reporting parameters that had to be kept in raw form.

    Returns
    -------
    Links
        Parsed links in the order they appear in the header. An empty header
        produces an empty list.

    Raises
    ------
    MalformedHeaderError
        Raised if a link entry does not start with ``<`` or its reference is
        not closed with ``>``.
    """
    if logger is None:
        logger = get_logger(ROOT_LOGGER)
    header = header.strip()
    links: list[Link] = []
    start = _skip_separators(header, 0)
    while start < len(header):
        if header[start] != "<":
            msg = "Link entry does not start with <"
            raise MalformedHeaderError(msg, header, start)
        uri_end = header.find(">", start)
        if uri_end == -1:
            msg = "Link reference is not terminated by >"
            raise MalformedHeaderError(msg, header, start)
        uri = header[start + 1 : uri_end]

        # Parameters start at the first semicolon after the reference, unless
        # the entry ends before one is seen.
        params: dict[str, LinkParam] = {}
        entry_end = _find_unquoted(header, ",", uri_end + 1)
        if entry_end == -1:
            entry_end = len(header)
        params_start = _find_unquoted(header, ";", uri_end + 1, entry_end)
        if params_start != -1:
            params, _ = parse_link_params(
                header[params_start + 1 : entry_end],
                default_encoding=default_encoding,
                default_language=default_language,
                logger=logger,
            )
        links.append(Link(uri=uri, params=params))

        # An empty remainder after the comma ends the header.
        start = _skip_separators(header, entry_end)

    return Links(tuple(links))


def parse_link_params(
    block: str,
    *,
    default_encoding: str = DEFAULT_ENCODING,
    default_language: str = DEFAULT_LANGUAGE,
    logger: BoundLogger | None = None,
) -> tuple[dict[str, LinkParam], int]:
    """Parse the parameters of one link entry.

    Parameters
    ----------
    block
        Text following the first semicolon after the link reference. It may
        run past the end of the entry, in which case parsing stops at the
        first comma outside a quoted string.
    default_encoding
        Encoding recorded for parameters that do not declare one.
    default_language
        Language recorded for parameters that do not declare one.
    logger
        Logger for reporting parameters that had to be kept in raw form.

    Returns
    -------
    tuple of dict of LinkParam and int
        Parameters keyed by name, and the offset in ``block`` at which the
        parameters of this entry end. If a name is repeated, the last
        occurrence wins.
    """
    end = _find_unquoted(block, ",")
    if end == -1:
        end = len(block)
    params: dict[str, LinkParam] = {}
    for text in _split_unquoted(block[:end], ";"):
        if not text.strip():
            continue
        name, param = parse_link_param(
            text,
            default_encoding=default_encoding,
            default_language=default_language,
            logger=logger,
        )
        params[name] = param
    return params, end


def parse_link_param(
    text: str,
    *,
    default_encoding: str = DEFAULT_ENCODING,
    default_language: str = DEFAULT_LANGUAGE,
    logger: BoundLogger | None = None,
) -> tuple[str, LinkParam]:
    """Parse a single ``name=value`` link parameter.

    Parameters
    ----------
    text
        Text of the parameter.
    default_encoding
        Encoding recorded if the parameter does not declare one.
    default_language
        Language recorded if the parameter does not declare one.
    logger
        Logger for reporting a parameter that had to be kept in raw form.

    Returns
    -------
    tuple of str and LinkParam
        Name of the parameter and its value.

    Notes
    -----
    A parameter with no ``=`` is returned with the whole text as its name and
    an empty value. An extended parameter whose value cannot be
    percent-decoded keeps its encoded value, and a plain parameter whose value
    is not a valid quoted-string keeps its value exactly as written.
    """
    if logger is None:
        logger = get_logger(ROOT_LOGGER)
    text = text.strip()
    name, sep, value = text.partition("=")
    if not sep:
        logger.debug("Link parameter has no value", param=text)
        param = LinkParam(encoding=default_encoding, language=default_language)
        return text, param
    name = name.strip()
    value = value.strip()
    encoding = default_encoding
    language = default_language

    if name.endswith("*"):
        name = name[:-1]
        parts = value.split("'")
        if len(parts) == 3:
            encoding, language, value = parts
        decoded = _percent_decode(value, encoding)
        if decoded is None:
            logger.debug("Cannot decode extended link parameter", param=text)
        else:
            value = decoded
    else:
        dequoted = _dequote(value)
        if dequoted is not None:
            value = dequoted
        elif value.startswith('"'):
            logger.debug("Invalid quoted link parameter", param=text)

    return name, LinkParam(value=value, encoding=encoding, language=language)


def _dequote(value: str) -> str | None:
    """Remove the quotes and backslash escapes from a quoted-string.

    Returns `None` if the value is not a single complete quoted-string.
    """
    match = _QUOTED_STRING.fullmatch(value)
    if not match:
        return None
    return _QUOTED_PAIR.sub(r"\1", match.group(1))


def _percent_decode(value: str, encoding: str) -> str | None:
    """Decode percent-encoded text.

    The resulting octets are decoded with the declared character set if
    Python knows it, and otherwise (or if that fails) as UTF-8. Unlike
    query-string decoding, a ``+`` is kept as a literal plus, since it is a
    valid unescaped character in an :rfc:`5987` ext-value. Returns `None` if
    the text contains a malformed escape or cannot be decoded.
    """
    if _BAD_ESCAPE.search(value):
        return None
    octets = unquote_to_bytes(value)
    for codec in (encoding, "utf-8"):
        try:
            return octets.decode(codec)
        except (LookupError, UnicodeError):
            continue
    return None


def _find_unquoted(
    text: str, target: str, start: int = 0, end: int | None = None
) -> int:
    """Find the first occurrence of a character outside a quoted-string.

    A quoted-string only starts with a ``"`` that begins a parameter value,
    so a stray ``"`` inside a token (``title=5"``) does not hide the
    separators that follow it.

    Returns -1 if there is no such occurrence in ``text[start:end]``.
    """
    if end is None:
        end = len(text)
    quoted = False
    escaped = False
    previous = ""
    for i in range(start, end):
        char = text[i]
        if quoted:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                quoted = False
        elif char == '"' and previous == "=":
            quoted = True
        elif char == target:
            return i
        if not char.isspace():
            previous = char
    return -1


def _split_unquoted(text: str, separator: str) -> list[str]:
    """Split text on a separator, ignoring separators in quoted-strings."""
    pieces = []
    start = 0
    while (index := _find_unquoted(text, separator, start)) != -1:
        pieces.append(text[start:index])
        start = index + 1
    pieces.append(text[start:])
    return pieces


def _skip_separators(header: str, start: int) -> int:
    """Skip the commas and whitespace between link entries."""
    while start < len(header) and header[start] in _ENTRY_SEPARATORS:
        start += 1
    return start
