"""
Tests for CLI Commands
======================
Tests for the memphrase CLI interface in memphrase/cli.py.
"""

import json
import re
import subprocess
import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from memphrase import __version__
from memphrase.cli import build_options, build_parser, main


def run_cli(*args):
    return subprocess.run(
        [sys.executable, "-m", "memphrase", *args],
        capture_output=True,
        text=True,
        cwd=str(ROOT),
    )


class TestCLIBasic:
    """Basic CLI tests."""

    def test_version_flag(self):
        """Test --version flag."""
        result = run_cli("--version")
        assert result.returncode == 0
        assert __version__ in result.stdout

    def test_help_flag(self):
        """Test --help flag."""
        result = run_cli("--help")
        assert result.returncode == 0
        assert "generate" in result.stdout.lower()
        assert "score" in result.stdout.lower()

    def test_generate_help(self):
        """Test generate --help."""
        result = run_cli("generate", "--help")
        assert result.returncode == 0
        assert "--count" in result.stdout
        assert "--syllables" in result.stdout

    def test_generate_subprocess(self):
        """Test a real generate run."""
        result = run_cli("generate", "-n", "2", "--words", "3")
        assert result.returncode == 0
        lines = result.stdout.strip().splitlines()
        assert len(lines) == 2
        assert all(len(line.split("-")) == 3 for line in lines)

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestBuildOptions:
    """Tests for argument -> GenerationOptions mapping."""

    def test_unset_flags_keep_defaults(self):
        args = build_parser().parse_args(["generate"])
        opts = build_options(args)
        assert opts.num_words == 4
        assert opts.capitalize is True

    def test_flags(self):
        args = build_parser().parse_args([
            "generate", "--mode", "randomChars", "--length", "24", "--no-upper",
            "--no-symbols-class", "--custom-symbols", "@#",
        ])
        opts = build_options(args)
        assert opts.generation_mode.value == "randomChars"
        assert opts.length == 24
        assert opts.include_uppercase is False
        assert opts.include_symbols is False
        assert opts.symbol_set == "@#"

    def test_repeatable_category(self):
        args = build_parser().parse_args(["g", "-c", "Adjectives", "-c", "Animals"])
        assert build_options(args).selected_categories == frozenset({"Adjectives", "Animals"})


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_words(self, capsys):
        code = main(["generate", "-n", "3", "--words", "3", "-c", "Adjectives", "-c", "Animals"])
        assert code == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 3
        for line in lines:
            assert all(re.fullmatch(r'[A-Z][a-z]*', t) for t in line.split("-"))

    def test_pronounceable(self, capsys):
        code = main(["gen", "--mode", "pronounceable", "--syllables", "6", "--no-capitalize"])
        assert code == 0
        assert re.fullmatch(r'[a-z]+', capsys.readouterr().out.strip())

    def test_random_length(self, capsys):
        code = main(["generate", "--mode", "randomChars", "--length", "20", "--no-symbols-class"])
        assert code == 0
        assert len(capsys.readouterr().out.strip()) == 20

    def test_json_with_strength(self, capsys):
        code = main(["generate", "-n", "2", "--json", "--strength"])
        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert len(payload) == 2
        assert {'password', 'strength'} <= set(payload[0])
        assert payload[0]['strength']['label']

    def test_strength_table(self, capsys):
        code = main(["generate", "-n", "2", "--strength"])
        assert code == 0
        assert "Strength" in capsys.readouterr().out

    def test_quiet(self, capsys):
        code = main(["-q", "generate", "--strength", "--words", "2"])
        assert code == 0
        out = capsys.readouterr().out.strip()
        assert len(out.split("-")) == 2

    def test_no_character_types(self, capsys):
        code = main(["generate", "--mode", "randomChars", "--no-lower", "--no-upper",
                     "--no-digits-class", "--no-symbols-class"])
        assert code == 1
        assert "No character types" in capsys.readouterr().err

    def test_unknown_category(self, capsys):
        code = main(["generate", "-c", "Dinosaurs"])
        assert code == 1
        assert "select at least one word category" in capsys.readouterr().err

    def test_bad_choice_exits(self):
        with pytest.raises(SystemExit):
            main(["generate", "--mode", "emoji"])


class TestOtherCommands:
    """Tests for score, pattern and categories."""

    def test_score_json(self, capsys):
        assert main(["score", "otter", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data['score'] == 0
        assert data['entropy_bits'] == 23.5

    def test_score_text(self, capsys):
        assert main(["s", "Swift-Amber-Otter-Run"]) == 0
        assert "Very Strong" in capsys.readouterr().out

    def test_score_sentinel(self, capsys):
        assert main(["score", "Error: nothing to do", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)['label'] == "-"

    def test_pattern(self, capsys):
        code = main(["pattern", "--words", "4", "-c", "Adjectives", "-c", "Nouns", "-c", "Verbs"])
        assert code == 0
        assert capsys.readouterr().out.strip() == "Adjective + Adjective + Noun + Verb"

    def test_pattern_nothing_selected(self, capsys):
        assert main(["pattern", "-c", "Dinosaurs"]) == 1

    def test_categories_json(self, capsys):
        assert main(["cats", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert set(data) == {"Adjectives", "Nouns", "Verbs"}
        assert data["Nouns"]["Animals"] > 0

    def test_categories_table(self, capsys):
        assert main(["categories"]) == 0
        assert "Animals" in capsys.readouterr().out
