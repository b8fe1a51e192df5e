"""Test the command line application"""

import json
from pathlib import Path

import pytest

from tablealign.application import Tablealign
from tablealign.preferences import PrefKey, preferences
from .test_support import run_test

INPUT_DIR = Path(__file__).parent / "input"


@pytest.mark.parametrize(
    "base_in, base_exp",
    [
        ("scenario.txt", "scenario.txt"),
        ("markdown.txt", "markdown.txt"),
        ("org.txt", "org.txt"),
        ("box.txt", "box.txt"),
    ],
)
def test_cli_output(
    capsys: pytest.CaptureFixture[str], base_in: str, base_exp: str
) -> None:
    """Test the CLI prints aligned tables, default padding being two cells"""

    def do_cli(filename: str) -> str:
        """Run the application on a file and return what it printed"""
        assert Tablealign(args=[filename]).run() == 0
        return capsys.readouterr().out

    run_test(base_in, base_exp, do_cli)


def test_cli_options(tmp_path: Path) -> None:
    """Test command line options override the prefs file"""
    prefs_file = tmp_path / "prefs.json"
    prefs_file.write_text(
        json.dumps({"table_padding": 40, "table_default_dialect": "org"}),
        encoding="utf-8",
    )
    Tablealign(args=["-p", str(prefs_file), "--padding", "24", "--full-height-bar"])
    assert preferences.get(PrefKey.TABLE_PADDING) == 24
    assert preferences.get(PrefKey.TABLE_FULL_HEIGHT_BAR)
    assert preferences.get(PrefKey.TABLE_DEFAULT_DIALECT) == "org"


def test_cli_malformed(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test an unalignable table is printed unchanged with a failure status"""
    text = "| a | b |\n| c |\n| d\n"
    source = tmp_path / "bad.txt"
    source.write_text(text, encoding="utf-8")
    assert Tablealign(args=[str(source)]).run() == 1
    assert capsys.readouterr().out == text


def test_cli_missing_file(tmp_path: Path) -> None:
    """Test a file that can't be read"""
    assert Tablealign(args=[str(tmp_path / "missing.txt")]).run() == 1


def test_cli_invalid_padding() -> None:
    """Test a bad padding is reported rather than raised"""
    args = [str(INPUT_DIR / "scenario.txt"), "--padding", "-8"]
    assert Tablealign(args=args).run() == 1
