from __future__ import annotations

import io

import pytest
from conftest import make_chapter, make_input

from mdbook_multicode.book import parse_input
from mdbook_multicode.exceptions import BookFormatError


def test_parse_input_decodes_bytes_as_utf8():
    raw = make_input([make_chapter("intro", "café\n")]).replace("caf\\u00e9", "café")

    _, book = parse_input(io.BytesIO(raw.encode("utf-8")))

    assert book["sections"][0]["Chapter"]["content"] == "café\n"


def test_parse_input_rejects_invalid_utf8():
    with pytest.raises(BookFormatError, match="not valid UTF-8"):
        parse_input(b'[{"root": "/", "renderer": "html"}, {"x": "\xff"}]')
