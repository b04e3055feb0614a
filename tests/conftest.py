import json

import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


def make_chapter(name: str, content: str, sub_items: list | None = None) -> dict:
    return {
        "Chapter": {
            "name": name,
            "content": content,
            "number": [1],
            "sub_items": sub_items or [],
            "path": f"{name}.md",
            "source_path": f"{name}.md",
            "parent_names": [],
        }
    }


def make_input(
    sections: list,
    preprocessor_config: dict | None = None,
    renderer: str = "html",
    root: str = "/path/to/book",
    ensure_ascii: bool = True,
) -> str:
    config: dict = {
        "book": {"authors": ["AUTHOR"], "language": "en", "src": "src", "title": "TITLE"},
    }
    if preprocessor_config is not None:
        config["preprocessor"] = {"multicode": preprocessor_config}
    context = {
        "root": root,
        "config": config,
        "renderer": renderer,
        "mdbook_version": "0.4.21",
    }
    book = {"sections": sections, "__non_exhaustive": None}
    return json.dumps([context, book], ensure_ascii=ensure_ascii)
