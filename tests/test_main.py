"""Tests for the command-line entry point."""

import json

import pytest

from solitaire_engine.game.autoplay import valid_moves
from solitaire_engine.game.engine import init
from solitaire_engine.main import build_parser, generate_log_filename, main
from solitaire_engine.models.game_state import Variant
from solitaire_engine.models.moves import format_notation


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test parsing with no arguments."""
        args = build_parser().parse_args([])

        assert args.moves == []
        assert args.seed is None
        assert not args.auto

    def test_invalid_draw_count(self):
        """Test that argparse refuses other draw counts."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--draw-count", "2"])

    def test_log_filename(self):
        """Test the generated log name."""
        name = generate_log_filename("logs", "klondike", 7)
        assert name.startswith("logs")
        assert name.endswith("_klondike_7.jsonl")


class TestMain:
    """Tests for main function."""

    def test_deal_only(self, capsys):
        """Test dealing without moves."""
        assert main(["--seed", "5"]) == 0
        out = capsys.readouterr().out
        assert "Freecell seed 5" in out
        assert "DEALT after 0 moves" in out

    def test_legal_moves(self, capsys):
        """Test playing accepted moves."""
        move = format_notation(valid_moves(init(5))[0])
        assert main(["--seed", "5", move]) == 0
        assert f"-> {move}" in capsys.readouterr().out

    def test_rejected_move(self, capsys):
        """Test that a rejected move stops play with exit code 1."""
        assert main(["--seed", "5", "t0-t0"]) == 1
        assert "same_location" in capsys.readouterr().out

    def test_bad_notation(self, capsys):
        """Test that unparseable notation is reported."""
        assert main(["--seed", "5", "nonsense"]) == 1
        assert "Error:" in capsys.readouterr().out

    def test_klondike_draw(self, capsys):
        """Test the Klondike variant with a draw."""
        assert main(["--variant", "klondike", "--seed", "5", "--draw-count", "3", "draw"]) == 0
        assert "Klondike seed 5" in capsys.readouterr().out

    def test_hint(self, capsys):
        """Test printing the cards the foundations need."""
        main(["--seed", "5", "--hint"])
        assert "Next needed: A♠, A♥, A♦, A♣" in capsys.readouterr().out

    def test_show_board(self, capsys):
        """Test printing the board."""
        main(["--variant", "klondike", "--seed", "5", "--show-board"])
        assert "##" in capsys.readouterr().out

    def test_config_file(self, tmp_path, capsys):
        """Test reading the variant and seed from a config file."""
        path = tmp_path / "config.yaml"
        path.write_text("game:\n  variant: klondike\n  seed: 77\n")

        assert main(["--config", str(path)]) == 0
        assert "Klondike seed 77" in capsys.readouterr().out

    def test_game_log(self, tmp_path):
        """Test writing a game log into a directory."""
        move = format_notation(valid_moves(init(5, Variant.FREECELL))[0])
        assert main(["--seed", "5", "--game-log", str(tmp_path), move]) == 0

        logs = list(tmp_path.glob("*_freecell_5.jsonl"))
        assert len(logs) == 1
        events = [json.loads(line) for line in logs[0].read_text(encoding="utf-8").splitlines()]
        assert [e["type"] for e in events] == ["session_start", "deal", "move", "session_end"]
