"""Extract links from HTTP responses."""

from __future__ import annotations

from httpx import Response

from .constants import LINK_HEADER
from .models import Links
from .parser import LinkHeaderParser

__all__ = ["links_from_response"]


def links_from_response(
    response: Response, *, parser: LinkHeaderParser | None = None
) -> Links:
    """Parse all ``Link`` headers of an HTTP response.

    A response may carry several ``Link`` header lines. They are treated as
    one comma-separated header value, so the links are returned in the order
    the lines appear.

    Parameters
    ----------
    response
        Response from an ``httpx`` client.
    parser
        Parser to use. If not given, one is built from the environment.

    Returns
    -------
    Links
        Parsed links, empty if the response has no ``Link`` header.

    Raises
    ------
    MalformedHeaderError
        Raised if a ``Link`` header is not structurally valid.
    """
    if parser is None:
        parser = LinkHeaderParser()
    lines = response.headers.get_list(LINK_HEADER)
    return parser.parse(", ".join(lines))
