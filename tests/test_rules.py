"""
Tests for GameController: turn order, outcomes and error handling.
"""

import numpy as np
import pytest

from connect4_engine import (ColumnFull, GameAlreadyOver, GameController, InvalidColumn,
                             MoveResult, Outcome, Player, new_game)

from conftest import DRAW_MOVES, DRAW_ROWS


def snapshot(game):
    return game.board.get_state(), game.current_player(), game.moves_made, game.outcome


def assert_unchanged(game, before):
    grid, player, moves, outcome = before
    assert np.array_equal(game.board.get_state(), grid)
    assert game.current_player() == player
    assert game.moves_made == moves
    assert game.outcome is outcome


class TestNewGame:
    """Construction and initial state."""

    def test_defaults(self):
        game = new_game()
        assert isinstance(game, GameController)
        assert game.width == 7
        assert game.height == 6
        assert game.current_player() is Player.ONE
        assert not game.is_over()
        assert game.outcome is Outcome.CONTINUE
        assert game.winner() is None
        assert game.last_move is None
        assert game.valid_moves() == list(range(7))

    def test_custom_identities(self):
        game = new_game(player1_id="A", player2_id="B")
        assert game.current_player() == "A"
        assert game.player_id(Player.TWO) == "B"
        assert game.cell_at(5, 0) is None

    def test_same_identity_rejected(self):
        with pytest.raises(ValueError):
            new_game(player1_id="A", player2_id="A")

    def test_board_too_small(self):
        with pytest.raises(ValueError):
            new_game(width=3)

    def test_games_are_independent(self):
        first = new_game()
        second = new_game()
        first.drop_piece(0)
        assert second.cell_at(5, 0) is None
        assert second.current_player() is Player.ONE


class TestDropPiece:
    """Single moves and turn alternation."""

    def test_first_move(self):
        game = new_game(player1_id="A", player2_id="B")
        result = game.drop_piece(3)
        assert result == MoveResult(row=5, column=3, player="A", outcome=Outcome.CONTINUE)
        assert result.winner is None
        assert game.cell_at(5, 3) == "A"
        assert game.current_player() == "B"
        assert game.moves_made == 1
        assert game.last_move == (5, 3)

    def test_column_fills_bottom_up(self):
        game = new_game(player1_id="A", player2_id="B")
        rows = [game.drop_piece(4).row for _ in range(game.height)]
        assert rows == [5, 4, 3, 2, 1, 0]
        assert [game.cell_at(r, 4) for r in range(6)] == ["B", "A", "B", "A", "B", "A"]

        before = snapshot(game)
        with pytest.raises(ColumnFull) as excinfo:
            game.drop_piece(4)
        assert excinfo.value.column == 4
        assert_unchanged(game, before)
        assert 4 not in game.valid_moves()

    @pytest.mark.parametrize("column", [-1, 7])
    def test_invalid_column(self, column):
        game = new_game()
        game.drop_piece(2)
        before = snapshot(game)
        with pytest.raises(InvalidColumn):
            game.drop_piece(column)
        assert_unchanged(game, before)

    @pytest.mark.parametrize("column", [True, float("inf"), float("-inf"), 2.5])
    def test_non_integer_column(self, column):
        game = new_game()
        before = snapshot(game)
        with pytest.raises(InvalidColumn):
            game.drop_piece(column)
        assert_unchanged(game, before)

    def test_errors_are_value_errors(self):
        game = new_game()
        with pytest.raises(ValueError):
            game.drop_piece(99)

    def test_turns_alternate(self):
        game = new_game(player1_id="A", player2_id="B")
        movers = [game.drop_piece(col).player for col in [0, 1, 2, 3, 4, 5, 6, 0]]
        assert movers == ["A", "B", "A", "B", "A", "B", "A", "B"]


class TestOutcomes:
    """Wins, ties and the terminal state."""

    def test_vertical_win(self):
        game = new_game(player1_id="A", player2_id="B")
        results = [game.drop_piece(col) for col in [0, 1, 0, 1, 0, 1, 0]]

        assert all(r.outcome is Outcome.CONTINUE for r in results[:-1])
        final = results[-1]
        assert final.outcome is Outcome.WIN
        assert final.winner == "A"
        assert (final.row, final.column) == (2, 0)
        assert final.winning_line == ((2, 0), (3, 0), (4, 0), (5, 0))

        assert game.is_over()
        assert game.winner() == "A"
        assert game.current_player() == "A"
        assert game.winning_line() == final.winning_line
        assert game.valid_moves() == []

    def test_second_player_can_win(self):
        game = new_game(player1_id="A", player2_id="B")
        for col in [1, 0, 1, 0, 1, 0, 2]:
            game.drop_piece(col)
        result = game.drop_piece(0)
        assert result.outcome is Outcome.WIN
        assert result.winner == "B"
        assert game.winner() == "B"

    def test_tie(self):
        game = new_game(player1_id="X", player2_id="O")
        results = [game.drop_piece(col) for col in DRAW_MOVES]

        assert len(results) == 42
        assert all(r.outcome is Outcome.CONTINUE for r in results[:-1])
        assert results[-1].outcome is Outcome.TIE
        assert results[-1].winner is None
        assert game.is_over()
        assert game.winner() is None
        assert game.winning_line() == ()

        for row, symbols in enumerate(DRAW_ROWS):
            assert [game.cell_at(row, col) for col in range(7)] == list(symbols)

        before = snapshot(game)
        for col in range(-1, 8):
            with pytest.raises(GameAlreadyOver):
                game.drop_piece(col)
        assert_unchanged(game, before)

    def test_moves_after_win_rejected(self):
        game = new_game()
        for col in [0, 1, 0, 1, 0, 1, 0]:
            game.drop_piece(col)
        before = snapshot(game)
        with pytest.raises(GameAlreadyOver):
            game.drop_piece(3)
        assert_unchanged(game, before)

    def test_win_on_last_cell_beats_tie(self):
        # 4x4 board; the sixteenth move fills the board and completes the top row
        game = new_game(width=4, height=4, player1_id="X", player2_id="O")
        moves = [0, 1, 0, 1, 1, 2, 2, 2, 0, 0, 3, 1, 3, 2, 3, 3]
        results = [game.drop_piece(col) for col in moves]

        assert all(r.outcome is Outcome.CONTINUE for r in results[:-1])
        assert game.board.is_full()
        assert results[-1].outcome is Outcome.WIN
        assert results[-1].winner == "O"
        assert results[-1].winning_line == ((0, 0), (0, 1), (0, 2), (0, 3))


class TestRandomPlay:
    """Invariants that hold for every move of random games."""

    @pytest.mark.parametrize("seed", range(10))
    def test_move_invariants(self, seed):
        rng = np.random.default_rng(seed)
        game = new_game(player1_id="A", player2_id="B")

        for _ in range(1000):
            if game.is_over():
                break
            column = int(rng.integers(-1, game.width + 1))
            before = snapshot(game)
            grid, mover = before[0], before[1]

            try:
                result = game.drop_piece(column)
            except (InvalidColumn, ColumnFull):
                assert_unchanged(game, before)
                continue

            after = game.board.get_state()
            changed = np.argwhere(after != grid)
            assert changed.tolist() == [[result.row, result.column]]
            assert grid[result.row, result.column] == Player.EMPTY.value
            assert result.player == mover
            assert game.cell_at(result.row, result.column) == mover

            # occupancy never has a gap below a piece
            occupied = after != Player.EMPTY.value
            for col in range(game.width):
                assert np.all(np.diff(occupied[:, col].astype(int)) >= 0)

            if result.outcome is Outcome.CONTINUE:
                assert game.current_player() != mover
            else:
                assert game.current_player() == mover
                assert game.is_over()

        assert game.is_over()
        with pytest.raises(GameAlreadyOver):
            game.drop_piece(0)
