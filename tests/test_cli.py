import io
import json

import pytest
from click.testing import CliRunner

from setlistnorm.cli import main, read_input
from setlistnorm.exceptions import InputDecodeError

SCENARIO = "01. Song A (Acoustic)\nStage Talk\nEncore\n03. Song C (Live)\nSong D / Song E [Duet]"


def _invoke(args=None, input=SCENARIO):
    return CliRunner().invoke(main, args or [], input=input)


# ---------------------------------------------------------------------------
# read_input
# ---------------------------------------------------------------------------


def test_read_input_utf8():
    assert read_input(io.BytesIO("アンコール".encode("utf-8"))) == "アンコール"


def test_read_input_drops_bom():
    assert read_input(io.BytesIO(b"\xef\xbb\xbfSong")) == "Song"


def test_read_input_other_encoding():
    data = "メンバー紹介".encode("shift_jis")
    assert read_input(io.BytesIO(data), "shift_jis") == "メンバー紹介"


def test_read_input_invalid_bytes():
    with pytest.raises(InputDecodeError) as excinfo:
        read_input(io.BytesIO(b"\xff\xfe\xfa"))
    assert excinfo.value.encoding == "utf-8"
    assert "utf-8-sig" not in str(excinfo.value)
    assert excinfo.value.source == "<stdin>"


def test_read_input_unknown_encoding():
    with pytest.raises(InputDecodeError):
        read_input(io.BytesIO(b"Song"), "no-such-codec")


# ---------------------------------------------------------------------------
# --help
# ---------------------------------------------------------------------------


def test_help_output():
    result = CliRunner().invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Normalize a concert setlist" in result.output
    assert "--include-non-songs" in result.output


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


def test_default_output_is_json_from_stdin():
    result = _invoke()
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["metadata"]["encoreCount"] == 1
    assert data["metadata"]["totalLines"] == 5
    assert data["blocks"][1] == {"type": "section", "name": "Encore"}


def test_json_keeps_japanese_characters():
    result = _invoke(input="曲A（弾き語り）")
    assert result.exit_code == 0
    assert "弾き語り" in result.output


def test_indent_zero_prints_single_line():
    result = _invoke(["--indent", "0"])
    assert result.exit_code == 0
    assert result.output.count("\n") == 1


def test_reads_file_argument(tmp_path):
    src = tmp_path / "setlist.txt"
    src.write_text(SCENARIO, encoding="utf-8")
    result = CliRunner().invoke(main, [str(src)])
    assert result.exit_code == 0
    assert json.loads(result.output)["metadata"]["totalLines"] == 5


# ---------------------------------------------------------------------------
# Option flags
# ---------------------------------------------------------------------------


def test_include_non_songs_and_drop_encore_markers():
    result = _invoke(["--include-non-songs", "--drop-encore-markers"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert all(block["type"] == "track" for block in data["blocks"])
    assert data["blocks"][1]["track"]["isNonSong"] is True
    assert data["metadata"]["skippedLines"] == []


def test_case_sensitive_flag_accepted():
    result = _invoke(["--case-sensitive"])
    assert result.exit_code == 0
    assert json.loads(result.output)["metadata"]["encoreCount"] == 1


def test_verbose_flag_accepted():
    result = _invoke(["-v", "--format", "text"])
    assert result.exit_code == 0
    assert "01. Song A (Acoustic)" in result.output


# ---------------------------------------------------------------------------
# Text output
# ---------------------------------------------------------------------------


def test_text_format():
    result = _invoke(["--format", "text"])
    assert result.exit_code == 0
    assert "-- Encore --" in result.output
    assert "03. Song D / Song E (Duet)" in result.output


# ---------------------------------------------------------------------------
# File output
# ---------------------------------------------------------------------------


def test_output_file_written(tmp_path):
    out_file = tmp_path / "setlist.json"
    result = _invoke(["-o", str(out_file)])
    assert result.exit_code == 0
    assert out_file.exists()
    assert json.loads(out_file.read_text(encoding="utf-8"))["metadata"]["totalLines"] == 5


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


def test_undecodable_input_exits_nonzero():
    result = _invoke(input=b"\xff\xfe\xfa")
    assert result.exit_code != 0
    assert "Error" in result.output


def test_shift_jis_input():
    result = _invoke(["--encoding", "shift_jis"], input="アンコール".encode("shift_jis"))
    assert result.exit_code == 0
    assert json.loads(result.output)["metadata"]["encoreCount"] == 1
