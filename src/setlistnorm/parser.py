"""Block assembler: setlist text → :class:`~setlistnorm.models.ParseResult`.

Every line is normalized on its own, then the normalized lines are folded in
order.  Decision policy per line, first match wins:

+---+-----------------------------------------+---------------------------------+
| # | Condition                               | Outcome                         |
+===+=========================================+=================================+
| 1 | encore marker                           | ``encore_count += 1``; section  |
|   |                                         | block if ``keep_encore_markers``|
+---+-----------------------------------------+---------------------------------+
| 2 | no title and no tags                    | skipped                         |
+---+-----------------------------------------+---------------------------------+
| 3 | non-song and ``exclude_non_songs``      | skipped                         |
+---+-----------------------------------------+---------------------------------+
| 4 | not renderable                          | skipped                         |
+---+-----------------------------------------+---------------------------------+
| 5 | anything else                           | track block                     |
+---+-----------------------------------------+---------------------------------+

Usage::

    from setlistnorm.parser import parse_setlist
    result = parse_setlist(text, {"excludeNonSongs": False})
    print(result.to_json(indent=2))
"""

import logging
from typing import Any, Mapping

from .lexicon import LINE_BREAK_PATTERN
from .models import (
    Block,
    NormalizedLine,
    ParseMetadata,
    ParseOptions,
    ParseResult,
    RawLine,
    SectionBlock,
    TrackBlock,
)
from .normalize import normalize_line

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[RawLine]:
    """Split *text* on LF, CRLF or CR and number the pieces from 1.

    An empty string has no lines at all; anything else yields one
    :class:`RawLine` per segment, blank segments included.
    """
    if not text:
        return []
    return [
        RawLine(original=segment, line_number=index)
        for index, segment in enumerate(LINE_BREAK_PATTERN.split(text), start=1)
    ]


def resolve_options(
    options: ParseOptions | Mapping[str, Any] | None = None, **overrides: Any
) -> ParseOptions:
    """Merge *options* and keyword *overrides* over the defaults.

    Missing, ``None`` and unknown fields never raise; they are simply ignored.
    """
    if isinstance(options, ParseOptions):
        resolved = options
    else:
        resolved = ParseOptions.from_mapping(options)
    if overrides:
        resolved = ParseOptions.from_mapping(overrides, base=resolved)
    return resolved


def encore_section_name(count: int) -> str:
    return "Encore" if count == 1 else f"Encore {count}"


def _is_renderable(line: NormalizedLine) -> bool:
    return bool(line.title) or bool(line.tags)


def parse_setlist(
    text: str,
    options: ParseOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> ParseResult:
    """Parse a whole setlist into ordered blocks plus metadata.

    Args:
        text:      Raw setlist text, any newline convention.
        options:   :class:`ParseOptions` or a partial mapping
                   (``{"keepEncoreMarkers": False}``).
        overrides: Field-name overrides, e.g. ``exclude_non_songs=False``.

    Returns:
        A fresh :class:`ParseResult`.  For every input
        ``total_lines == tracks + encore_count + len(skipped_lines)``.
    """
    opts = resolve_options(options, **overrides)
    raw_lines = split_lines(text)
    normalized = [normalize_line(raw, opts) for raw in raw_lines]

    blocks: list[Block] = []
    skipped: list[RawLine] = []
    encore_count = 0

    for line in normalized:
        if line.is_encore_marker:
            encore_count += 1
            if opts.keep_encore_markers:
                blocks.append(SectionBlock(name=encore_section_name(encore_count)))
            continue

        if line.is_empty:
            skipped.append(line.raw)
            continue

        if line.is_non_song and opts.exclude_non_songs:
            logger.debug("Skipping non-song line %d: %r", line.raw.line_number, line.title)
            skipped.append(line.raw)
            continue

        if not _is_renderable(line):
            skipped.append(line.raw)
            continue

        blocks.append(TrackBlock(track=line))

    metadata = ParseMetadata(
        encore_count=encore_count,
        total_lines=len(raw_lines),
        skipped_lines=skipped,
    )
    logger.debug(
        "Parsed %d lines: %d blocks, %d encores, %d skipped",
        metadata.total_lines,
        len(blocks),
        encore_count,
        len(skipped),
    )
    return ParseResult(blocks=blocks, metadata=metadata)
