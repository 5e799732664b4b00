"""Tests for parsing link parameters."""

from __future__ import annotations

import pytest

from linkheader import LinkParam, parse_link_param, parse_link_params


def test_quoted() -> None:
    assert parse_link_param('rel="next"') == ("rel", LinkParam(value="next"))
    assert parse_link_param(' rel = "next" ') == (
        "rel",
        LinkParam(value="next"),
    )


def test_token() -> None:
    assert parse_link_param("rel=next") == ("rel", LinkParam(value="next"))
    assert parse_link_param("rel=") == ("rel", LinkParam(value=""))


@pytest.mark.parametrize(
    ("text", "value"),
    [
        ('title="unterminated', '"unterminated'),
        ('title="a" junk', '"a" junk'),
        ('title="trailing\\"', '"trailing\\"'),
        ("title='single'", "'single'"),
    ],
)
def test_invalid_quoting(text: str, value: str) -> None:
    name, param = parse_link_param(text)
    assert name == "title"
    assert param == LinkParam(value=value)


def test_quoted_pair() -> None:
    _, param = parse_link_param(r'title="back\\slash \"quoted\""')
    assert param.value == 'back\\slash "quoted"'


def test_no_equals() -> None:
    assert parse_link_param("noequals") == ("noequals", LinkParam())
    name, param = parse_link_param("  noequals  ")
    assert name == "noequals"
    assert param.value == ""
    assert param.encoding == "us-ascii"
    assert param.language == "en-us"


def test_extended() -> None:
    name, param = parse_link_param("title*=UTF-8'en'%E2%9C%93")
    assert name == "title"
    assert param == LinkParam(value="✓", encoding="UTF-8", language="en")


def test_extended_no_prefix() -> None:
    name, param = parse_link_param("title*=%20spaced")
    assert name == "title"
    assert param == LinkParam(
        value=" spaced", encoding="us-ascii", language="en-us"
    )


def test_extended_empty_language() -> None:
    _, param = parse_link_param("title*=iso-8859-1''%E9t%E9")
    assert param == LinkParam(value="été", encoding="iso-8859-1", language="")


def test_extended_wrong_part_count() -> None:
    _, param = parse_link_param("title*=it's")
    assert param == LinkParam(value="it's")

    _, param = parse_link_param("title*=a'b'c'd")
    assert param == LinkParam(value="a'b'c'd")


def test_extended_unknown_charset() -> None:
    _, param = parse_link_param("title*=x-unknown'en'%C3%A9")
    assert param == LinkParam(value="é", encoding="x-unknown", language="en")


def test_extended_non_ascii_default() -> None:
    _, param = parse_link_param("title*=%E2%9C%93")
    assert param == LinkParam(value="✓")


def test_extended_plus() -> None:
    _, param = parse_link_param("title*=UTF-8''C++")
    assert param.value == "C++"


@pytest.mark.parametrize(
    "encoded", ["%ZZbad", "trailing%", "short%4", "%FF"]
)
def test_extended_undecodable(encoded: str) -> None:
    _, param = parse_link_param(f"title*=UTF-8'en'{encoded}")
    assert param == LinkParam(value=encoded, encoding="UTF-8", language="en")


def test_defaults() -> None:
    name, param = parse_link_param(
        "rel=next", default_encoding="utf-8", default_language="fr"
    )
    assert name == "rel"
    assert param == LinkParam(value="next", encoding="utf-8", language="fr")

    _, param = parse_link_param(
        "noequals", default_encoding="utf-8", default_language="fr"
    )
    assert param == LinkParam(encoding="utf-8", language="fr")


def test_params_block() -> None:
    params, end = parse_link_params("rel=next; title=x")
    assert params == {
        "rel": LinkParam(value="next"),
        "title": LinkParam(value="x"),
    }
    assert end == 17


def test_params_block_end() -> None:
    block = 'rel=next; title="a, b", <c>; rel=prev'
    params, end = parse_link_params(block)
    assert params == {
        "rel": LinkParam(value="next"),
        "title": LinkParam(value="a, b"),
    }
    assert block[end] == ","
    assert end == 22


def test_params_block_empty() -> None:
    assert parse_link_params("") == ({}, 0)
    assert parse_link_params(" ; ;") == ({}, 4)
    assert parse_link_params(", <b>") == ({}, 0)


def test_params_block_duplicates() -> None:
    params, _ = parse_link_params("rel=prev; title=x; rel=next")
    assert params["rel"].value == "next"
    assert len(params) == 2


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (
            "title*=punycode''99999999",
            LinkParam(value="99999999", encoding="punycode", language=""),
        ),
        (
            "title*=idna''%80",
            LinkParam(value="%80", encoding="idna", language=""),
        ),
    ],
)
def test_extended_codec_error(text: str, expected: LinkParam) -> None:
    assert parse_link_param(text) == ("title", expected)
