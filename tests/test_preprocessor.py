from __future__ import annotations

from pathlib import Path

import pytest
from conftest import make_chapter, make_input

from mdbook_multicode.book import parse_input
from mdbook_multicode.config import ConfigError
from mdbook_multicode.exceptions import BlowUpError, BookFormatError
from mdbook_multicode.preprocessor import MulticodePreprocessor
from mdbook_multicode.template import default_template

BLOCK = "```multicode\n>>>>> py\nprint('hi')\n<<<<<\n```\n"


def _run(raw: str, **kwargs):
    ctx, book = parse_input(raw)
    return MulticodePreprocessor(**kwargs).run(ctx, book)


def test_name_and_renderer_support():
    preprocessor = MulticodePreprocessor()

    assert preprocessor.name == "multicode"
    assert preprocessor.supports_renderer("html") is True
    assert preprocessor.supports_renderer("markdown") is False
    assert preprocessor.supports_renderer("latex") is False


def test_run_rewrites_every_chapter():
    raw = make_input(
        [
            make_chapter("intro", "Plain\n"),
            "Separator",
            make_chapter("guide", BLOCK, sub_items=[make_chapter("nested", BLOCK)]),
        ]
    )

    book = _run(raw, header="HEADER")

    intro, separator, guide = book["sections"]
    assert intro["Chapter"]["content"] == "HEADER\nPlain\n"
    assert separator == "Separator"
    assert 'id="code-example-tab-0-py"' in guide["Chapter"]["content"]
    nested = guide["Chapter"]["sub_items"][0]["Chapter"]
    # sequence numbers restart for every chapter
    assert 'id="code-example-tab-0-py"' in nested["content"]
    assert "print(&#39;hi&#39;)" in nested["content"]


def test_run_uses_bundled_template_by_default():
    book = _run(make_input([make_chapter("intro", "Plain\n")]))

    content = book["sections"][0]["Chapter"]["content"]
    assert content == f"{default_template()}\nPlain\n"
    assert "function changeCodeExample" in content


def test_run_preserves_other_chapter_fields():
    book = _run(make_input([make_chapter("intro", BLOCK)]), header="")

    chapter = book["sections"][0]["Chapter"]
    assert chapter["name"] == "intro"
    assert chapter["number"] == [1]
    assert chapter["source_path"] == "intro.md"
    assert book["__non_exhaustive"] is None


def test_blow_up_fails_before_touching_chapters():
    ctx, book = parse_input(
        make_input([make_chapter("intro", BLOCK)], preprocessor_config={"blow-up": True})
    )

    with pytest.raises(BlowUpError, match="Blowing up!"):
        MulticodePreprocessor(header="").run(ctx, book)

    assert book["sections"][0]["Chapter"]["content"] == BLOCK


def test_unsupported_renderer_leaves_book_unchanged():
    warnings: list[str] = []

    book = _run(
        make_input([make_chapter("intro", BLOCK)], renderer="markdown"),
        warn=warnings.append,
    )

    assert book["sections"][0]["Chapter"]["content"] == BLOCK
    assert warnings and "markdown" in warnings[0]


def test_diagnostics_disabled_by_default():
    warnings: list[str] = []

    _run(make_input([make_chapter("intro", "```multicode\n")]), header="", warn=warnings.append)

    assert warnings == []


def test_diagnostics_enabled_by_config():
    warnings: list[str] = []

    _run(
        make_input(
            [make_chapter("intro", "```multicode\n```\n")],
            preprocessor_config={"warn-unterminated": True},
        ),
        header="",
        warn=warnings.append,
    )

    assert warnings == [
        "multicode: intro.md: multicode block starting at line 1 declares no languages"
    ]


def test_template_override_is_read_relative_to_root(tmp_path: Path):
    (tmp_path / "theme").mkdir()
    (tmp_path / "theme" / "tabs.html").write_text("<script>custom</script>\n", encoding="utf-8")

    book = _run(
        make_input(
            [make_chapter("intro", "Plain\n")],
            preprocessor_config={"template": "theme/tabs.html"},
            root=str(tmp_path),
        )
    )

    assert book["sections"][0]["Chapter"]["content"] == "<script>custom</script>\nPlain\n"


def test_missing_template_override_is_a_config_error(tmp_path: Path):
    with pytest.raises(ConfigError, match="Cannot read template"):
        _run(
            make_input(
                [make_chapter("intro", "Plain\n")],
                preprocessor_config={"template": "missing.html"},
                root=str(tmp_path),
            )
        )


def test_blow_up_reported_even_with_invalid_settings():
    ctx, book = parse_input(
        make_input(
            [make_chapter("intro", BLOCK)],
            preprocessor_config={"blow-up": True, "unknown": 1},
        )
    )

    with pytest.raises(BlowUpError, match="Blowing up!"):
        MulticodePreprocessor(header="").run(ctx, book)


def test_malformed_chapter_leaves_book_untouched():
    ctx, book = parse_input(
        make_input([make_chapter("intro", BLOCK), {"Chapter": {"name": "broken"}}])
    )

    with pytest.raises(BookFormatError, match=r"book\[1\]\.Chapter"):
        MulticodePreprocessor(header="").run(ctx, book)

    assert book["sections"][0]["Chapter"]["content"] == BLOCK
