from __future__ import annotations

from obstacle_chess.cli.main import main, replay
from obstacle_chess.engine.game import Game


def test_batch_replay_writes_board(tmp_path) -> None:
    board = tmp_path / "in.txt"
    log = tmp_path / "game.log"
    out = tmp_path / "out.txt"
    Game.new().save_board_file(str(board))
    log.write_text("% moves\ne2-e4\ne7-e5\nbogus\n", encoding="utf-8")

    assert main([str(board), str(log), str(out)]) == 0
    result = Game.new()
    result.load_board_file(str(out))
    assert result.board.pieces[4][4] == "P"
    assert result.board.pieces[3][4] == "p"
    assert result.status().active == "w"


def test_batch_replay_stops_on_checkmate(tmp_path, capsys) -> None:
    mated = Game.new()
    for mv in ("e2-e4", "e7-e5", "d1-h5", "b8-c6", "f1-c4", "g8-f6", "h5-f7"):
        mated.submit(mv)
    board = tmp_path / "mate.txt"
    mated.save_board_file(str(board))
    out = tmp_path / "out.txt"

    assert replay(str(board), str(tmp_path / "unused.log"), str(out)) == 0
    assert "INFO: checkmate" in capsys.readouterr().out
    assert not out.exists()


def test_batch_replay_missing_input(tmp_path, capsys) -> None:
    code = main([str(tmp_path / "none.txt"), str(tmp_path / "none.log"), str(tmp_path / "out.txt")])
    assert code == 1
    assert capsys.readouterr().out.startswith("ERROR: ")
