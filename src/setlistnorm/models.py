import json
from dataclasses import dataclass, field, fields
from typing import Any, Literal, Mapping, Union


@dataclass(frozen=True)
class RawLine:
    """One line of input exactly as typed, with its 1-based position."""

    original: str
    line_number: int

    def to_dict(self) -> dict[str, Any]:
        return {"original": self.original, "lineNumber": self.line_number}


@dataclass
class NormalizedLine:
    """A single setlist line after canonicalization and classification.

    Example: "01. Song A (Acoustic)" → title "Song A", tags ["Acoustic"].
    A bracket-only line such as "[Acoustic Version]" has an empty title.
    """

    title: str
    raw: RawLine
    tags: list[str] = field(default_factory=list)
    is_encore_marker: bool = False
    is_non_song: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.title and not self.tags

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "tags": list(self.tags),
            "isEncoreMarker": self.is_encore_marker,
            "isNonSong": self.is_non_song,
            "raw": self.raw.to_dict(),
        }


@dataclass
class TrackBlock:
    """A song (or kept non-song) entry in the setlist."""

    track: NormalizedLine
    kind: Literal["track"] = field(default="track", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "track": self.track.to_dict()}


@dataclass
class SectionBlock:
    """A structural marker. Only encores produce these, e.g. "Encore 2"."""

    name: str
    kind: Literal["section"] = field(default="section", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "name": self.name}


Block = Union[TrackBlock, SectionBlock]

# Wire (camelCase) option names → dataclass field names.
_OPTION_ALIASES = {
    "excludeNonSongs": "exclude_non_songs",
    "keepEncoreMarkers": "keep_encore_markers",
    "ignoreCase": "ignore_case",
}


@dataclass(frozen=True)
class ParseOptions:
    """Switches controlling which lines become blocks."""

    exclude_non_songs: bool = True
    keep_encore_markers: bool = True
    ignore_case: bool = True

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[str, Any] | None, base: "ParseOptions | None" = None
    ) -> "ParseOptions":
        """Build options from a partial mapping laid over *base* (or the defaults).

        Both wire names (``excludeNonSongs``) and field names
        (``exclude_non_songs``) are accepted.  Unknown keys and ``None``
        values are ignored.
        """
        values = {f.name: getattr(base or cls(), f.name) for f in fields(cls)}
        for key, value in (mapping or {}).items():
            name = _OPTION_ALIASES.get(key, key)
            if name in values and value is not None:
                values[name] = bool(value)
        return cls(**values)

    def to_dict(self) -> dict[str, bool]:
        return {wire: getattr(self, name) for wire, name in _OPTION_ALIASES.items()}


@dataclass
class ParseMetadata:
    encore_count: int = 0
    total_lines: int = 0
    skipped_lines: list[RawLine] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "encoreCount": self.encore_count,
            "totalLines": self.total_lines,
            "skippedLines": [line.to_dict() for line in self.skipped_lines],
        }


@dataclass
class ParseResult:
    """Ordered blocks plus bookkeeping for one parse call."""

    blocks: list[Block] = field(default_factory=list)
    metadata: ParseMetadata = field(default_factory=ParseMetadata)

    @property
    def tracks(self) -> list[NormalizedLine]:
        return [b.track for b in self.blocks if isinstance(b, TrackBlock)]

    @property
    def sections(self) -> list[str]:
        return [b.name for b in self.blocks if isinstance(b, SectionBlock)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "blocks": [block.to_dict() for block in self.blocks],
            "metadata": self.metadata.to_dict(),
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
