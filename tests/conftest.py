" generic fixtures "
import logging
from pathlib import Path

import pytest

SAMPLE_GRAMMAR = """
[cmdcomplete]
strategy = "word"

[commands.grab]
args = ["central", "jcenter"]
any_level = ["--help"]

[commands.color.sub.red]
args = ["prompt", "text"]

[commands.color.sub.blue]
args = ["prompt", "text"]

[commands.highlight.multi_part]
separator = "+"
parts = [["red", "blue"], ["bold", "b"]]
args = ["now"]

[commands.getAll]
[commands.giveAccess]
"""


def pytest_configure():
    "Runs once before all"
    from cmdcomplete.logging_setup import init_logger

    init_logger("/dev/null", debug=True)


@pytest.fixture
def test_logger():
    "A logger for the configuration objects"
    return logging.getLogger("tests")


@pytest.fixture
def grammar_file(tmp_path: Path) -> Path:
    "A valid grammar file"
    path = tmp_path / "config.toml"
    path.write_text(SAMPLE_GRAMMAR)
    return path
