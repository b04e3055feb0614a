"""Constants used across the mdbook-multicode package."""

from __future__ import annotations

import re

PREPROCESSOR_NAME = "multicode"
SUPPORTED_RENDERERS = ("html",)

# Multicode markers, matched against whole lines only
BLOCK_OPEN_MARKER = "```multicode"
BLOCK_CLOSE_MARKER = "```"
SECTION_OPEN_PREFIX = ">>>>> "
SECTION_CLOSE_MARKER = "<<<<<"

BLOCK_OPEN_PATTERN = re.compile(rf"^{re.escape(BLOCK_OPEN_MARKER)}$")
BLOCK_CLOSE_PATTERN = re.compile(rf"^{re.escape(BLOCK_CLOSE_MARKER)}$")
SECTION_OPEN_PATTERN = re.compile(rf"^{re.escape(SECTION_OPEN_PREFIX)}(?P<language>[a-zA-Z0-9]+)$")
SECTION_CLOSE_PATTERN = re.compile(rf"^{re.escape(SECTION_CLOSE_MARKER)}$")

# Markup
GROUP_ID_PREFIX = "code-example-tab-"
SELECT_CLASS = "code-example"
ACTIVATE_FUNCTION = "changeCodeExample"
TEMPLATE_RESOURCE = "script_template.html"

# Limits for the standalone `render` command
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
MARKDOWN_EXTENSIONS = (".md", ".markdown")
MAX_FILE_SIZE_ENV_VAR = "MDBOOK_MULTICODE_MAX_FILE_SIZE"
