"""Models for parsed ``Link`` headers."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, overload

from pydantic import BaseModel, ConfigDict, Field, RootModel

from .constants import DEFAULT_ENCODING, DEFAULT_LANGUAGE, RELATION_PARAM

__all__ = ["Link", "LinkParam", "Links"]


class LinkParam(BaseModel):
    """A single link parameter along with its declared encoding.

    Parameters may declare their own character set and language using the
    extended syntax from :rfc:`2231` (``title*=UTF-8'en'%E2%9C%93``). The
    value is always returned as a Python string. If the declared character
    set is not one Python understands, UTF-8 is tried instead; other
    character sets must be handled by the caller if desired.

    Multi-part parameters (``title*0``, ``title*1``, ...) are not reassembled.
    They can be reconstructed by concatenating the values of each part in
    order.
    """

    model_config = ConfigDict(frozen=True)

    value: Annotated[
        str,
        Field(
            title="Parameter value",
            description=(
                "Decoded value for extended parameters, unquoted value for"
                " quoted parameters, or the raw value if neither applies"
            ),
        ),
    ] = ""

    encoding: Annotated[
        str, Field(title="Declared character set of the value")
    ] = DEFAULT_ENCODING

    language: Annotated[
        str, Field(title="Declared language of the value")
    ] = DEFAULT_LANGUAGE


class Link(BaseModel):
    """One link from a parsed ``Link`` header.

    The model is frozen, but Pydantic does not freeze the ``params``
    dictionary itself. Treat it as read-only; a parsed header is shared by
    everything that holds the result.
    """

    model_config = ConfigDict(frozen=True)

    uri: Annotated[
        str,
        Field(
            title="Link target",
            description=(
                "Text between ``<`` and ``>``, neither decoded nor validated"
            ),
        ),
    ]

    params: Annotated[
        dict[str, LinkParam],
        Field(
            title="Link parameters",
            description=(
                "Parameters by name. If a name is repeated, the last"
                " occurrence wins."
            ),
        ),
    ] = {}

    @property
    def rel(self) -> str | None:
        """Value of the ``rel`` parameter, or `None` if it is not present."""
        param = self.params.get(RELATION_PARAM)
        return param.value if param else None


class Links(RootModel[tuple[Link, ...]]):
    """Links from a ``Link`` header in the order they appeared."""

    model_config = ConfigDict(frozen=True)

    root: tuple[Link, ...] = ()

    def __iter__(self) -> Iterator[Link]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    @overload
    def __getitem__(self, index: int) -> Link: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Link, ...]: ...

    def __getitem__(self, index: int | slice) -> Link | tuple[Link, ...]:
        return self.root[index]

    def by_relation(self) -> dict[str, Link]:
        """Map the links by their relation.

        Links without a ``rel`` parameter are omitted. If more than one link
        has the same ``rel`` value, the last one wins, but callers should not
        rely on which link is kept.

        Returns
        -------
        dict of Link
            Links keyed by the value of their ``rel`` parameter.
        """
        return {x.rel: x for x in self.root if x.rel is not None}
