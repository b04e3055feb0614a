"""Data models for mdbook-multicode."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True)
class Idle:
    """Outside any multicode block; lines are copied through."""


@dataclass(frozen=True, slots=True)
class InBlock:
    """Inside a multicode block, between language sections.

    Attributes:
        start_line: One-based line number of the block-open marker.
    """

    start_line: int = 0


@dataclass(frozen=True, slots=True)
class InLanguageSection:
    """Inside a language section of a multicode block.

    Attributes:
        language: Language identifier captured from the section-open marker.
        start_line: One-based line number of the section-open marker.
        block_start_line: One-based line number of the enclosing block-open marker.
    """

    language: str
    start_line: int = 0
    block_start_line: int = 0


ParseState = Union[Idle, InBlock, InLanguageSection]


@dataclass
class MulticodeBlock:
    """Language samples collected between a block's open and close markers.

    Attributes:
        sequence_number: Zero-based index of the block within its document.
        language_order: Languages in order of first declaration, without duplicates.
        language_text: Accumulated sample text per language, one ``\\n`` per line.
    """

    sequence_number: int
    language_order: list[str] = field(default_factory=list)
    language_text: dict[str, str] = field(default_factory=dict)

    def open_section(self, language: str) -> None:
        """Start (or restart) the sample for `language`.

        A language declared again keeps its first position but its text is
        reset, so the last section for a language wins.
        """
        if language not in self.language_text:
            self.language_order.append(language)
        self.language_text[language] = ""

    def append_line(self, language: str, line: str) -> None:
        self.language_text[language] += f"{line}\n"

    @property
    def is_empty(self) -> bool:
        return not self.language_order


@dataclass
class TransformResult:
    """Outcome of transforming one document.

    Attributes:
        content: Rewritten document text, starting with the template header.
        blocks_rendered: Number of blocks that produced markup.
        blocks_seen: Number of blocks closed in the document, including empty ones.
    """

    content: str
    blocks_rendered: int = 0
    blocks_seen: int = 0


@dataclass
class ParserContext:
    """Encapsulate parser state while walking one document.

    Attributes:
        state: Current parser state.
        block: Block being collected, or None outside a block.
        sequence_number: Index assigned to the next block that closes.
        blocks_rendered: Number of blocks that produced markup so far.
    """

    state: ParseState = field(default_factory=Idle)
    block: MulticodeBlock | None = None
    sequence_number: int = 0
    blocks_rendered: int = 0
