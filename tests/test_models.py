from mdbook_multicode.models import (
    Idle,
    InBlock,
    InLanguageSection,
    MulticodeBlock,
    ParserContext,
)


def test_parser_context_defaults():
    ctx = ParserContext()

    assert ctx.state == Idle()
    assert ctx.block is None
    assert ctx.sequence_number == 0
    assert ctx.blocks_rendered == 0


def test_parse_states_are_distinct():
    assert Idle() != InBlock()
    assert InLanguageSection("rust") != InLanguageSection("cpp")
    assert InLanguageSection("rust").language == "rust"


def test_block_keeps_first_declaration_order():
    block = MulticodeBlock(sequence_number=0)

    block.open_section("rust")
    block.open_section("cpp")
    block.open_section("rust")

    assert block.language_order == ["rust", "cpp"]


def test_redeclared_language_resets_text():
    block = MulticodeBlock(sequence_number=0)

    block.open_section("rust")
    block.append_line("rust", "first")
    block.open_section("rust")
    block.append_line("rust", "second")

    assert block.language_text == {"rust": "second\n"}


def test_empty_block():
    block = MulticodeBlock(sequence_number=3)

    assert block.is_empty is True
    block.open_section("py")
    assert block.is_empty is False
    assert block.language_text == {"py": ""}
