import pytest

from mdbook_multicode.classifier import (
    is_block_close,
    is_block_open,
    is_section_close,
    match_section_open,
)


def test_block_open_requires_exact_line():
    assert is_block_open("```multicode") is True
    assert is_block_open("```multicode ") is False
    assert is_block_open(" ```multicode") is False
    assert is_block_open("```multicode\n") is False
    assert is_block_open("```Multicode") is False
    assert is_block_open("```") is False


def test_block_close_requires_exact_fence():
    assert is_block_close("```") is True
    assert is_block_close("````") is False
    assert is_block_close("``` ") is False
    assert is_block_close("```rust") is False


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        (">>>>> rust", "rust"),
        (">>>>> Cpp17", "Cpp17"),
        (">>>>> 42", "42"),
        (">>>>> c++", None),
        (">>>>> rust ", None),
        (">>>>>  rust", None),
        (">>>>>rust", None),
        (">>>> rust", None),
        (">>>>> ", None),
        (">>>>> two words", None),
    ],
)
def test_match_section_open(line, expected):
    assert match_section_open(line) == expected


def test_section_close_requires_exact_line():
    assert is_section_close("<<<<<") is True
    assert is_section_close("<<<<< ") is False
    assert is_section_close("<<<<<<") is False
    assert is_section_close("<<<<") is False
