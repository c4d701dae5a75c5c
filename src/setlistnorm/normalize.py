"""Single-line normalizer: raw setlist line → :class:`NormalizedLine`.

Pipeline (fixed order):

  1. canonicalize()         — NFKC + extra substitution table
  2. collapse_whitespace()  — runs of whitespace → one space, trimmed
  3. strip_leading_token()  — "01.", "(2)", "IV.", "★", "第2部" … (at most once)
  4. extract_tags()         — (…) […] ＜…＞ 〈…〉 → tags, residual → title
  5. join_delimited()       — "A/B" or "A ／ B" → "A / B"
  6. is_encore() / is_non_song() on the detection string and on every tag

Each step is a plain function so callers (and tests) can use them on their
own.  Nothing here depends on any other line or keeps state between calls.
"""

import unicodedata

from .lexicon import (
    DELIMITER_PATTERN,
    ENCORE_PATTERN,
    ENCORE_TOKENS,
    EXTRA_SUBSTITUTIONS,
    LEADING_TOKEN_PATTERN,
    NON_SONG_KEYWORDS,
    NON_SONG_PATTERNS,
    TAG_PATTERN,
    TRACK_SEPARATOR,
    WHITESPACE_PATTERN,
)
from .models import NormalizedLine, ParseOptions, RawLine


# ---------------------------------------------------------------------------
# Text steps
# ---------------------------------------------------------------------------


def canonicalize(text: str) -> str:
    """Apply NFKC, then the characters NFKC does not settle the way we want."""
    text = unicodedata.normalize("NFKC", text)
    for char, replacement in EXTRA_SUBSTITUTIONS.items():
        text = text.replace(char, replacement)
    return text


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def strip_leading_token(text: str) -> tuple[str, bool]:
    """Remove one ordinal/bullet prefix from *text*.

    Returns:
        ``(value, stripped)`` where *stripped* tells whether anything was removed.
    """
    value = LEADING_TOKEN_PATTERN.sub("", text, count=1)
    return value, len(value) != len(text)


def extract_tags(text: str) -> tuple[str, list[str]]:
    """Pull bracketed annotations out of *text*.

    Example::

        extract_tags("Song A (Acoustic) [Short]")  →  ("Song A", ["Acoustic", "Short"])

    Brackets holding only whitespace still count and yield an empty tag.
    """
    tags: list[str] = []
    for match in TAG_PATTERN.finditer(text):
        inner = next(group for group in match.groups() if group is not None)
        tags.append(collapse_whitespace(inner))
    title = collapse_whitespace(TAG_PATTERN.sub(" ", text))
    return title, tags


def join_delimited(title: str) -> str:
    """Rewrite slash-delimited medleys with the canonical ``" / "`` separator.

    The result is still one title; empty parts (``"Song /"``) are dropped.
    """
    if not DELIMITER_PATTERN.search(title):
        return title
    parts = (collapse_whitespace(part) for part in DELIMITER_PATTERN.split(title))
    return TRACK_SEPARATOR.join(part for part in parts if part)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def detection_string(title: str, ignore_case: bool = True) -> str:
    return title.lower() if ignore_case else title


def _tag_detection_string(tag: str) -> str:
    return canonicalize(tag).lower()


def _matches_non_song(text: str) -> bool:
    return text in NON_SONG_KEYWORDS or any(p.search(text) for p in NON_SONG_PATTERNS)


def is_encore(detect: str, tags: list[str]) -> bool:
    """True if the line-level detection string or any single tag marks an encore."""
    if detect and ENCORE_PATTERN.match(detect):
        return True
    for tag in tags:
        tag_detect = _tag_detection_string(tag)
        if ENCORE_PATTERN.match(tag_detect) or tag_detect in ENCORE_TOKENS:
            return True
    return False


def is_non_song(detect: str, tags: list[str]) -> bool:
    """True if the detection string or any single tag is an MC/intro/etc. keyword.

    The line-level string and each tag are tested separately; a line with an
    empty title is classified from its tags alone.
    """
    if detect and _matches_non_song(detect):
        return True
    return any(_matches_non_song(_tag_detection_string(tag)) for tag in tags)


# ---------------------------------------------------------------------------
# Full pipeline
# ---------------------------------------------------------------------------


def normalize_line(raw: RawLine, options: ParseOptions | None = None) -> NormalizedLine:
    """Normalize and classify one raw setlist line.

    Never raises: unrecognised prefixes or unbalanced brackets are simply
    left in the title.
    """
    options = options or ParseOptions()

    text = collapse_whitespace(canonicalize(raw.original))
    text, _ = strip_leading_token(text)
    title, tags = extract_tags(collapse_whitespace(text))
    title = join_delimited(title)

    detect = detection_string(title, ignore_case=options.ignore_case is not False)

    return NormalizedLine(
        title=title,
        tags=tags,
        is_encore_marker=is_encore(detect, tags),
        is_non_song=is_non_song(detect, tags),
        raw=raw,
    )
