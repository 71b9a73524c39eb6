"""
Managed text block upsert

A block looks like::

    # >>> ALPI ENV (managed by alpi)
    export EDITOR=nvim
    # <<< ALPI ENV

Writing a block removes every earlier instance of the same name and
appends the new one at end of file, so repeated runs never duplicate it.
"""
import re
from pathlib import Path
from typing import Pattern

from ...core.constants import BLOCK_END_PREFIX, BLOCK_OWNER_SUFFIX, BLOCK_START_PREFIX
from ...core.interfaces import Executor
from ...core.logging import get_logger
from .models import TextBlock

logger = get_logger(__name__)


def start_marker(name: str) -> str:
    return f"{BLOCK_START_PREFIX}{name}{BLOCK_OWNER_SUFFIX}"


def end_marker(name: str) -> str:
    return f"{BLOCK_END_PREFIX}{name}"


def block_pattern(name: str) -> Pattern[str]:
    """
    Region from a line starting ``# >>> NAME`` to the line ``# <<< NAME``.

    Anything after the name on the start line is ignored. A start marker
    without an end marker extends to end of file. One blank line directly
    above the start marker belongs to the block (it is the separator
    ``upsert_block_text`` writes).
    """
    start = re.escape(BLOCK_START_PREFIX + name)
    end = re.escape(BLOCK_END_PREFIX + name)
    return re.compile(
        rf"(?ms)(?:^\n)?^{start}(?:[ \t][^\n]*)?(?:\n|\Z).*?(?:^{end}[ \t]*(?:\n|\Z)|\Z)"
    )


def count_blocks(text: str, name: str) -> int:
    return len(block_pattern(name).findall(text))


def strip_block(text: str, name: str) -> str:
    """Remove every instance of block ``name``"""
    return block_pattern(name).sub("", text)


def render_block(block: TextBlock) -> str:
    body = block.content.rstrip("\n")
    lines = [start_marker(block.name)]
    if body:
        lines.append(body)
    lines.append(end_marker(block.name))
    return "\n".join(lines) + "\n"


def upsert_block_text(text: str, block: TextBlock) -> str:
    """Pure form of ``upsert_text_block``: return the new file content"""
    remaining = strip_block(text, block.name).rstrip("\n")
    prefix = remaining + "\n\n" if remaining else ""
    return prefix + render_block(block)


def upsert_text_block(executor: Executor, path: Path, name: str, content: str) -> None:
    """
    Replace (or add) block ``name`` in ``path`` with ``content``.

    The file is created when missing. Safe to call any number of times:
    the file always ends up with exactly one instance of the block.
    """
    current = executor.read_text(path) or ""
    updated = upsert_block_text(current, TextBlock(name=name, content=content))
    logger.debug(f"[block] {name} -> {path}")
    executor.make_dirs(path.parent)
    executor.write_text(path, updated)
