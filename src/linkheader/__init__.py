"""Parser for the value of HTTP ``Link`` headers."""

from importlib.metadata import PackageNotFoundError, version

from .config import ParserConfig
from .exceptions import LinkHeaderError, MalformedHeaderError
from .models import Link, LinkParam, Links
from .parser import (
    LinkHeaderParser,
    parse_link_header,
    parse_link_param,
    parse_link_params,
)
from .response import links_from_response

__all__ = [
    "Link",
    "LinkHeaderError",
    "LinkHeaderParser",
    "LinkParam",
    "Links",
    "MalformedHeaderError",
    "ParserConfig",
    "__version__",
    "links_from_response",
    "parse_link_header",
    "parse_link_param",
    "parse_link_params",
]


__version__: str
"""The application version string (PEP 440 / SemVer compatible)."""

try:
    __version__ = version("linkheader")
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0"
