"""Plain-text rendering of a :class:`~setlistnorm.models.ParseResult`.

Block → text mapping
--------------------

+------------------------------+----------------------------------------+
| Block                        | Rendered as                            |
+==============================+========================================+
| Track                        | ``01. Title (tag) (tag)``              |
+------------------------------+----------------------------------------+
| Track, tags only             | ``02. (Acoustic Version)``             |
+------------------------------+----------------------------------------+
| Track kept as non-song       | ``* Stage Talk`` (not numbered)        |
+------------------------------+----------------------------------------+
| Section                      | blank line, then ``-- Encore 2 --``    |
+------------------------------+----------------------------------------+

Usage::

    from setlistnorm.formatter import SetlistFormatter
    print(SetlistFormatter().render(result), end="")
"""

from .models import NormalizedLine, ParseResult, SectionBlock


class SetlistFormatter:
    """Render a :class:`~setlistnorm.models.ParseResult` as a readable setlist."""

    def render(self, result: ParseResult) -> str:
        """Return the setlist text for *result*.

        Song numbering runs across the whole setlist, encores included.  The
        returned string ends with a single newline (or is empty when there
        are no blocks) and uses ``\\n`` throughout.
        """
        parts: list[str] = []
        number = 0

        for block in result.blocks:
            if isinstance(block, SectionBlock):
                if parts:
                    parts.append("")  # blank line before every later section
                parts.append(f"-- {block.name} --")
                continue

            track = block.track
            if track.is_non_song:
                parts.append(f"* {_describe(track)}")
                continue
            number += 1
            parts.append(f"{number:02d}. {_describe(track)}")

        if not parts:
            return ""
        return "\n".join(parts) + "\n"


def _describe(track: NormalizedLine) -> str:
    """Title followed by each tag in parentheses."""
    pieces = [track.title] if track.title else []
    pieces.extend(f"({tag})" for tag in track.tags)
    return " ".join(pieces)
