"""Exceptions for the Link header parser."""

from typing import override

from safir.slack.blockkit import SlackCodeBlock, SlackException, SlackMessage
from safir.slack.sentry import SentryEventInfo

__all__ = ["LinkHeaderError", "MalformedHeaderError"]


class LinkHeaderError(SlackException):
    """Base class for errors raised while parsing a ``Link`` header."""


class MalformedHeaderError(LinkHeaderError):
    """The ``Link`` header value is not structurally valid.

    Raised when a link entry does not start with ``<`` or when its reference
    is never closed with ``>``. Problems inside a single parameter are not
    errors and are handled by keeping the parameter in degraded form.

    Parameters
    ----------
    message
        Summary error message.
    header
        Full header value being parsed.
    offset
        Offset into ``header`` at which parsing failed.
    """

    def __init__(self, message: str, header: str, offset: int) -> None:
        super().__init__(f"{message} (at offset {offset})")
        self.header = header
        self.offset = offset

    @override
    def to_slack(self) -> SlackMessage:
        """Convert to a Slack message for Slack alerting.

        Returns
        -------
        SlackMessage
            Slack message suitable for posting as an alert.
        """
        message = super().to_slack()
        block = SlackCodeBlock(heading="Header", code=self.header)
        message.attachments.append(block)
        return message

    @override
    def to_sentry(self) -> SentryEventInfo:
        """Return Sentry metadata for this exception."""
        info = super().to_sentry()
        info.contexts["link_header"] = {
            "header": self.header,
            "offset": self.offset,
        }
        return info
