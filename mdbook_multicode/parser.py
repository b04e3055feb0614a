"""Single-pass multicode block parser."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from .classifier import is_block_close, is_block_open, is_section_close, match_section_open
from .emitter import render_block
from .models import Idle, InBlock, InLanguageSection, MulticodeBlock, ParserContext, TransformResult

Warn = Callable[[str], None]


def split_lines(content: str) -> Iterator[str]:
    """Yield the lines of `content` without line terminators.

    Lines end at ``\\n``; a ``\\r`` right before it is dropped as well. A
    trailing newline does not start an extra empty line.

    Examples:
        list(split_lines("a\\r\\nb\\n"))  # ["a", "b"]
        list(split_lines(""))  # []
    """
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    for line in lines:
        yield line[:-1] if line.endswith("\r") else line


def _try_open_block(ctx: ParserContext, line: str, line_number: int) -> bool:
    """Start collecting a block when `line` is the block-open marker.

    Args:
        ctx: Parser context to update.
        line: Current line.
        line_number: One-based number of `line`.

    Returns:
        bool: True when a block was opened.
    """
    if not isinstance(ctx.state, Idle) or not is_block_open(line):
        return False

    ctx.block = MulticodeBlock(sequence_number=ctx.sequence_number)
    ctx.state = InBlock(start_line=line_number)
    return True


def _try_close_block(
    ctx: ParserContext, line: str, output: list[str], warn: Warn | None = None
) -> bool:
    """Finish the current block when `line` is the closing fence.

    Blocks without any language section vanish from the output, markers
    included. The sequence number advances either way.

    Returns:
        bool: True when the block was closed.
    """
    state = ctx.state
    if not isinstance(state, InBlock) or not is_block_close(line):
        return False

    block = ctx.block
    if block is not None and not block.is_empty:
        output.append(render_block(block))
        output.append("\n")
        ctx.blocks_rendered += 1
    elif warn is not None:
        warn(f"multicode block starting at line {state.start_line} declares no languages")

    ctx.sequence_number += 1
    ctx.block = None
    ctx.state = Idle()
    return True


def _try_open_section(ctx: ParserContext, line: str, line_number: int) -> bool:
    """Enter a language section when `line` is a section-open marker.

    Returns:
        bool: True when a section was opened.
    """
    state = ctx.state
    if not isinstance(state, InBlock) or ctx.block is None:
        return False

    language = match_section_open(line)
    if language is None:
        return False

    ctx.block.open_section(language)
    ctx.state = InLanguageSection(
        language=language, start_line=line_number, block_start_line=state.start_line
    )
    return True


def _try_close_section(ctx: ParserContext, line: str) -> bool:
    state = ctx.state
    if not isinstance(state, InLanguageSection) or not is_section_close(line):
        return False

    ctx.state = InBlock(start_line=state.block_start_line)
    return True


def _report_unterminated(ctx: ParserContext, warn: Warn) -> None:
    state = ctx.state
    if isinstance(state, InLanguageSection):
        warn(
            f"unterminated language section '{state.language}' "
            f"starting at line {state.start_line}"
        )
        warn(f"unterminated multicode block starting at line {state.block_start_line}")
    elif isinstance(state, InBlock):
        warn(f"unterminated multicode block starting at line {state.start_line}")


def transform_markdown(content: str, header: str, warn: Warn | None = None) -> TransformResult:
    """Replace multicode blocks in a document with tabbed code examples.

    The output starts with `header` and a newline. Lines outside multicode
    blocks are copied as they are, each followed by a newline. Inside a
    block, only lines within ``>>>>> <language>`` / ``<<<<<`` sections are
    kept; everything else is dropped. Malformed structure never raises: an
    unterminated block or section at the end of the document is discarded.

    Args:
        content: Markdown text of one document.
        header: Template header placed before the document.
        warn: Optional callback receiving diagnostics about unterminated or
            empty blocks. Diagnostics never change the output.

    Returns:
        TransformResult: Rewritten text and block counts.

    Examples:
        transform_markdown("```multicode\\n>>>>> py\\nx = 1\\n<<<<<\\n```\\n", "")
    """
    ctx = ParserContext()
    output: list[str] = [header, "\n"]

    for line_number, line in enumerate(split_lines(content), start=1):
        state = ctx.state

        if isinstance(state, InLanguageSection):
            if not _try_close_section(ctx, line) and ctx.block is not None:
                ctx.block.append_line(state.language, line)
            continue

        if isinstance(state, InBlock):
            if _try_close_block(ctx, line, output, warn):
                continue
            # Lines between sections are dropped
            _try_open_section(ctx, line, line_number)
            continue

        if _try_open_block(ctx, line, line_number):
            continue

        output.append(line)
        output.append("\n")

    if warn is not None:
        _report_unterminated(ctx, warn)

    return TransformResult(
        content="".join(output),
        blocks_rendered=ctx.blocks_rendered,
        blocks_seen=ctx.sequence_number,
    )
