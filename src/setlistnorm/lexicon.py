"""Lexical tables shared by the line normalizer.

Everything here is built once at import time and never mutated: tuples,
frozensets, a read-only mapping proxy and precompiled :class:`re.Pattern`
objects.  Compiled patterns keep no scan position between calls, so the same
objects are safe to use from any number of threads.

Leading-token forms stripped (once) from the start of a line:

  - numeric index + separator     ``01.``  ``3)``  ``12、``
  - numeric index + whitespace    ``01 Song``
  - numeric index + dash          ``02 - Song``
  - parenthesised numeral         ``(1)``  ``（2）``
  - Roman numeral + separator     ``IV.``  ``II:``
  - multi-letter I/V/X numeral    ``II Song``
  - bullet glyph                  ``★``  ``●``  ``・``  ``-``
  - Japanese act marker           ``第2部``
"""

import re
from types import MappingProxyType

# Characters NFKC leaves alone (or maps somewhere unhelpful) for setlists.
EXTRA_SUBSTITUTIONS = MappingProxyType({
    "〜": "~",   # WAVE DASH
    "～": "~",   # FULLWIDTH TILDE
    "‘": "'",
    "’": "'",
    "＇": "'",
    "“": '"',
    "”": '"',
    "＂": '"',
    "＆": "&",
    "＃": "#",
    "！": "!",
    "？": "?",
    "　": " ",  # IDEOGRAPHIC SPACE
    "\ufeff": "",  # BYTE ORDER MARK
})

NON_SONG_KEYWORDS = frozenset({
    "mc",
    "m.c.",
    "stage talk",
    "talk",
    "mcコーナー",
    "トーク",
    "interlude",
    "instrumental",
    "intro",
    "outro",
    "opening",
    "ending",
    "se",
    "vtr",
    "member introduction",
    "メンバー紹介",
    "バンド紹介",
    "アンコール待ち",
})

NON_SONG_PATTERNS = (
    re.compile(r"^mc\d*$", re.IGNORECASE),
    re.compile(r"^m\.c\.$", re.IGNORECASE),
    re.compile(r"stage\s*talk", re.IGNORECASE),
    re.compile(r"^talk$", re.IGNORECASE),
    re.compile(r"^mcコーナー$", re.IGNORECASE),
    re.compile(r"^トーク$"),
    re.compile(r"^interlude$", re.IGNORECASE),
    re.compile(r"^instrumental$", re.IGNORECASE),
    re.compile(r"^intro$", re.IGNORECASE),
    re.compile(r"^outro$", re.IGNORECASE),
    re.compile(r"^opening$", re.IGNORECASE),
    re.compile(r"^ending$", re.IGNORECASE),
    re.compile(r"^se$", re.IGNORECASE),
    re.compile(r"^vtr$", re.IGNORECASE),
    re.compile(r"member\s*introduction", re.IGNORECASE),
    re.compile(r"^メンバー紹介$"),
    re.compile(r"^バンド紹介$"),
    re.compile(r"^アンコール待ち$"),
)

ENCORE_TOKENS = frozenset({"encore", "アンコール"})

# NFKC turns ＜＞ into <>, so both spellings are accepted.
ENCORE_PATTERN = re.compile(
    r"^[\[<＜]?\s*(?:encore|アンコール)\s*[\]>＞]?$",
    re.IGNORECASE,
)

_SEPARATOR = r"[.．、:)）]"

LEADING_TOKEN_PATTERN = re.compile(
    r"^\s*(?:"
    r"\d{1,3}(?:\s*[-–—](?=\s)|" + _SEPARATOR + r"|(?=\s))"  # 01.  3)  01 Song  02 - Song
    r"|[(（]\d{1,2}[)）]"                                     # (1)
    r"|[IVXLCDM]+" + _SEPARATOR + r"(?=\s|$)"                 # IV.  II:
    r"|[IVX]{2,}(?=\s)"                                      # II Song
    r"|[★☆◎○●•・\-–—]"                                       # bullets
    r"|第\d+部"                                               # act marker
    r")\s*"
)

# One capture group per bracket style; exactly one participates in a match.
TAG_PATTERN = re.compile(
    r"\(([^)]+)\)"
    r"|\[([^\]]+)\]"
    r"|[＜<]([^＞>]+)[＞>]"
    r"|〈([^〉]+)〉"
)

DELIMITER_PATTERN = re.compile(r"\s*[/／]\s*")

WHITESPACE_PATTERN = re.compile(r"\s+")

LINE_BREAK_PATTERN = re.compile(r"\r\n?|\n")

TRACK_SEPARATOR = " / "
