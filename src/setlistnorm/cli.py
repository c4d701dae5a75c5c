import logging
import sys
from pathlib import Path
from typing import BinaryIO

import click

from .exceptions import InputDecodeError, SetlistError
from .formatter import SetlistFormatter
from .models import ParseOptions
from .parser import parse_setlist


def read_input(stream: BinaryIO, encoding: str = "utf-8") -> str:
    """Read and decode setlist bytes from *stream*.

    A UTF-8 byte order mark is dropped.  Raises InputDecodeError if the bytes
    are not valid in *encoding*.
    """
    source = getattr(stream, "name", "<stdin>")
    codec = encoding
    if codec.lower().replace("_", "-") in ("utf-8", "utf8"):
        codec = "utf-8-sig"
    data = stream.read()
    try:
        return data.decode(codec)
    except (UnicodeDecodeError, LookupError) as exc:
        raise InputDecodeError(str(source), encoding) from exc


@click.command()
@click.argument("source", type=click.File("rb"), default="-")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Write to PATH instead of stdout.")
@click.option("--format", "output_format", type=click.Choice(["json", "text"]),
              default="json", show_default=True, help="Output format.")
@click.option("--indent", default=2, show_default=True,
              help="JSON indentation (0 for a single line).")
@click.option("--include-non-songs", is_flag=True, default=False,
              help="Keep MC, intro, interlude and similar lines as tracks.")
@click.option("--drop-encore-markers", is_flag=True, default=False,
              help="Count encores but do not emit encore sections.")
@click.option("--case-sensitive", is_flag=True, default=False,
              help="Match non-song keywords without lowercasing.")
@click.option("--encoding", default="utf-8", show_default=True,
              help="Encoding of the input text.")
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Log parser decisions to stderr.")
def main(
    source: BinaryIO,
    output_path: str | None,
    output_format: str,
    indent: int,
    include_non_songs: bool,
    drop_encore_markers: bool,
    case_sensitive: bool,
    encoding: str,
    verbose: bool,
) -> None:
    """Normalize a concert setlist into tracks and encore sections.

    \b
    SOURCE is a text file, or - (the default) to read stdin.
    Numbering ("01.", "(2)", "★"), bracketed notes ("(Acoustic)",
    "＜Duet＞") and full-width punctuation are cleaned up; MC/talk
    lines are dropped unless --include-non-songs is given.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="%(levelname)s %(name)s: %(message)s")

    # --- Read ---
    try:
        text = read_input(source, encoding)
    except SetlistError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    # --- Parse ---
    options = ParseOptions(
        exclude_non_songs=not include_non_songs,
        keep_encore_markers=not drop_encore_markers,
        ignore_case=not case_sensitive,
    )
    result = parse_setlist(text, options)

    # --- Render ---
    if output_format == "text":
        rendered = SetlistFormatter().render(result)
    else:
        rendered = result.to_json(indent=indent or None) + "\n"

    # --- Output ---
    if output_path is None:
        click.echo(rendered, nl=False)
        return

    dest = Path(output_path)
    dest.write_text(rendered, encoding="utf-8")
    click.echo(f"Written to {dest}", err=True)
