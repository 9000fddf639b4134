"""Tests for grammar files."""

import tomllib

import pytest

from cmdcomplete.autocomplete import PrefixAutocompleter, WordAutocompleter
from cmdcomplete.completer import CompletionResult
from cmdcomplete.grammar import build_completer, build_node, build_roots, load_grammar, validate_grammar
from cmdcomplete.matchers import describe, walk
from cmdcomplete.models import ConfigError


def test_load_grammar(grammar_file, test_logger):
    config = load_grammar(grammar_file, test_logger)
    assert sorted(config["commands"]) == ["color", "getAll", "giveAccess", "grab", "highlight"]
    assert config.section("cmdcomplete").get("strategy") == "word"


def test_grammar_completion(grammar_file, test_logger):
    completer = build_completer(load_grammar(grammar_file, test_logger))
    assert isinstance(completer.autocompleter, WordAutocompleter)
    assert completer.complete("gA").candidates == ["getAll", "giveAccess"]
    assert completer.complete("grab ") == CompletionResult(5, ["central", "jcenter", "--help"])
    assert completer.complete("grab central -").candidates == ["--help"]
    assert completer.complete("color red ").candidates == ["prompt", "text"]
    assert completer.complete("color ").candidates == ["red", "blue"]
    assert completer.complete("highlight blue+").candidates == ["blue+bold", "blue+b"]
    assert completer.complete("highlight blue+b ").candidates == ["now"]


def test_strategy_override(grammar_file, test_logger):
    completer = build_completer(load_grammar(grammar_file, test_logger), "prefix")
    assert isinstance(completer.autocompleter, PrefixAutocompleter)
    assert completer.complete("gA") == CompletionResult()


def test_default_strategy(tmp_path, test_logger):
    path = tmp_path / "grammar.toml"
    path.write_text("[commands.grab]\nargs = ['central']\n")
    completer = build_completer(load_grammar(path, test_logger))
    assert isinstance(completer.autocompleter, WordAutocompleter)


def test_children_order():
    node = build_node(
        "cmd",
        {
            "any_level": ["--help"],
            "args": ["arg"],
            "multi_part": {"separator": ":", "parts": [["a"], ["b"]]},
            "sub": {"sub": {}},
        },
    )
    assert [describe(child) for child in node.children()] == ["sub", "arg", "{a}:{b}", "*--help"]


def test_build_roots(grammar_file, test_logger):
    roots = build_roots(load_grammar(grammar_file, test_logger))
    assert [(depth, describe(m)) for depth, m in walk(roots["color"])] == [
        (0, "color"),
        (1, "red"),
        (2, "prompt"),
        (2, "text"),
        (1, "blue"),
        (2, "prompt"),
        (2, "text"),
    ]


def test_env_var(grammar_file, test_logger, monkeypatch):
    monkeypatch.setenv("CMDCOMPLETE_CONFIG", str(grammar_file))
    assert "grab" in load_grammar("", test_logger)["commands"]


def test_include(tmp_path, test_logger):
    (tmp_path / "main.toml").write_text('[cmdcomplete]\ninclude = ["extra/more.toml"]\n\n[commands.grab]\nargs = ["central"]\n')
    (tmp_path / "extra").mkdir()
    (tmp_path / "extra" / "more.toml").write_text('[commands.grab]\nargs = ["jcenter"]\n\n[commands.color]\n')
    config = load_grammar(tmp_path / "main.toml", test_logger)
    assert config["commands"]["grab"]["args"] == ["central", "jcenter"]
    assert "color" in config["commands"]


def test_include_loop(tmp_path, test_logger):
    (tmp_path / "main.toml").write_text('[cmdcomplete]\ninclude = ["main.toml"]\n\n[commands.grab]\n')
    config = load_grammar(tmp_path / "main.toml", test_logger)
    assert list(config["commands"]) == ["grab"]


def test_directory(tmp_path, test_logger):
    (tmp_path / "b.toml").write_text("[commands.color]\n")
    (tmp_path / "a.toml").write_text("[commands.grab]\n")
    (tmp_path / "notes.txt").write_text("not a grammar")
    config = load_grammar(tmp_path, test_logger)
    assert list(config["commands"]) == ["grab", "color"]


def test_missing_file(tmp_path, test_logger):
    with pytest.raises(ConfigError):
        load_grammar(tmp_path / "missing.toml", test_logger)


def test_syntax_error(tmp_path, test_logger):
    path = tmp_path / "bad.toml"
    path.write_text("[commands\n")
    with pytest.raises(ConfigError):
        load_grammar(path, test_logger)


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("[cmdcomplete]\n", "'commands': Missing required field"),
        ('commands = "grab"\n', "Expected a section, got str"),
        ('[cmdcomplete]\nstrategy = "fuzzy"\n[commands.grab]\n', "Invalid value 'fuzzy'"),
        ('[commands.grab]\nargs = "central"\n', "[config.commands.grab] Config error for 'args': Expected a list"),
        ('[commands.grab]\nargs = ["central", ""]\n', "Expected a non-empty string, got ''"),
        ('[commands.grab.sub.x]\nargs = [1]\n', "[config.commands.grab.sub.x] Config error for 'args'"),
        ('[commands.h.multi_part]\nseparator = "+"\nparts = [["a"]]\n', "'parts' must be a list of at least 2"),
        ('[commands.h.multi_part]\nseparator = " "\nparts = [["a"], ["b"]]\n', "'separator' must be a non-empty string"),
        ('[commands.h.multi_part]\nseparator = "+"\nparts = [["a"], []]\n', "Part #2 must be a non-empty list"),
        ('[commands.h.multi_part]\nseparator = "+"\nparts = [["a"], ["b"]]\nextra = 1\n', "Unknown option 'extra'"),
    ],
)
def test_validation_errors(tmp_path, test_logger, content, message):
    path = tmp_path / "grammar.toml"
    path.write_text(content)
    with pytest.raises(ConfigError):
        load_grammar(path, test_logger)

    errors, _ = validate_grammar(tomllib.loads(content), test_logger)
    assert any(message in error for error in errors)


def test_validation_warnings(test_logger):
    config = {
        "cmdcomplete": {"strategie": "word"},
        "commands": {"grab": {"arg": ["central"]}},
        "comands": {},
    }
    errors, warnings = validate_grammar(config, test_logger)
    assert errors == []
    assert "[config] Unknown option 'comands' (did you mean 'commands'?)" in warnings
    assert "[config.commands.grab] Unknown option 'arg' (did you mean 'args'?)" in warnings
    assert "[cmdcomplete] Unknown option 'strategie' (did you mean 'strategy'?)" in warnings


def test_blank_name_reported_with_other_errors(test_logger):
    """A blank command name is reported even when another command is invalid."""
    config = tomllib.loads('[commands.""]\n[commands.grab]\nargs = "central"\n')
    errors, _ = validate_grammar(config, test_logger)
    assert "[config] Config error for 'commands': Name must be non-empty, got ''" in errors
    assert any(error.startswith("[config.commands.grab] Config error for 'args'") for error in errors)
