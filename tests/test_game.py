import numpy as np
import pytest
from hypothesis import given, strategies as st

from tictactoe.core.board import Board, Mark
from tictactoe.core.evaluator import is_move_legal
from tictactoe.core.game import GameHistory
from tictactoe.core.move import GameError, HistoryEntry, IllegalMove, Move, OutOfRange


def test_new_game_starts_with_empty_board():
    g = GameHistory()
    assert len(g) == 1
    assert g.current_move == 0
    assert g.current_board() == Board.empty()
    assert g.next_mark() == Mark.X
    assert g.status() == "Next player: X"


def test_first_move_marks_x_and_passes_turn():
    g = GameHistory()
    g.apply_move(0)
    assert g.current_board()[0] == Mark.X
    assert g.status() == "Next player: ○"
    assert g.next_mark() == Mark.O


def test_top_row_win_for_x():
    g = GameHistory.from_moves([0, 3, 1, 4, 2])
    assert g.winner() == Mark.X
    assert g.status() == "Winner: X"
    assert g.is_game_over()


def test_no_moves_after_win():
    g = GameHistory.from_moves([0, 3, 1, 4, 2])
    before = list(g.history)
    with pytest.raises(IllegalMove):
        g.apply_move(8)
    assert g.history == before
    assert g.current_move == 5


def test_occupied_cell_changes_nothing():
    g = GameHistory.from_moves([4])
    with pytest.raises(IllegalMove) as exc:
        g.apply_move(4)
    assert exc.value.index == 4
    assert "occupied" in str(exc.value)
    assert len(g) == 2
    assert g.current_move == 1


@pytest.mark.parametrize("cell", [-1, 9, 1.5, None, True])
def test_invalid_cells_are_illegal(cell):
    g = GameHistory()
    with pytest.raises(IllegalMove):
        g.apply_move(cell)
    assert len(g) == 1


def test_illegal_move_is_game_error_and_value_error():
    assert issubclass(IllegalMove, GameError)
    assert issubclass(IllegalMove, ValueError)
    assert issubclass(OutOfRange, GameError)
    assert issubclass(OutOfRange, IndexError)


def test_jump_back_to_start():
    g = GameHistory.from_moves([0, 1])
    assert len(g) == 3
    g.jump_to(0)
    assert g.current_board() == Board.empty()
    assert g.next_mark() == Mark.X
    assert len(g) == 3


def test_jump_out_of_range_changes_nothing():
    g = GameHistory.from_moves([0, 1])
    with pytest.raises(OutOfRange) as exc:
        g.jump_to(5)
    assert exc.value.length == 3
    with pytest.raises(OutOfRange):
        g.jump_to(-1)
    assert len(g) == 3
    assert g.current_move == 2


def test_move_after_jump_discards_future():
    g = GameHistory.from_moves([0, 1, 2, 3, 4])
    assert len(g) == 6
    g.jump_to(2)
    g.apply_move(8)
    assert len(g) == 4
    assert g.current_move == 3
    assert g.current_board()[8] == Mark.X
    assert g.current_board()[2] == Mark.EMPTY
    assert g.is_latest()


def test_jump_still_works_after_win():
    g = GameHistory.from_moves([0, 3, 1, 4, 2])
    g.jump_to(4)
    assert g.winner() is None
    assert g.status() == "Next player: X"
    g.apply_move(8)
    assert len(g) == 6
    assert g.winner() is None


def test_turn_follows_pointer_parity():
    g = GameHistory.from_moves([0, 1, 2])
    for m, mark in [(0, Mark.X), (1, Mark.O), (2, Mark.X), (3, Mark.O)]:
        g.jump_to(m)
        assert g.next_mark() == mark


def test_list_moves_labels():
    g = GameHistory.from_moves([4, 0])
    assert g.list_moves() == [
        HistoryEntry(0, "Go to game start"),
        HistoryEntry(1, "Go to move #1"),
        HistoryEntry(2, "Go to move #2"),
    ]
    g.jump_to(1)
    assert [e.move_index for e in g.list_moves()] == [0, 1, 2]


def test_moves_recovered_from_snapshots():
    g = GameHistory.from_moves([4, 0, 8])
    assert g.moves() == [Move(4, Mark.X), Move(0, Mark.O), Move(8, Mark.X)]
    assert str(g.moves()[1]) == "○ at A1"


def test_draw_game():
    g = GameHistory.from_moves([0, 1, 2, 4, 3, 5, 7, 6, 8])
    state = g.get_state()
    assert state.winner is None
    assert state.is_draw
    assert state.is_game_over()
    assert g.status() == "Next player: ○"
    with pytest.raises(IllegalMove):
        g.apply_move(0)


def test_get_state_snapshot():
    g = GameHistory.from_moves([0, 4])
    g.jump_to(1)
    state = g.get_state()
    assert state.current_move == 1
    assert state.next_mark == Mark.O
    assert state.history_length == 3
    assert state.board == Board.from_string("X........")
    assert not state.is_game_over()


@given(st.lists(st.integers(min_value=0, max_value=8), max_size=20))
def test_random_play_keeps_history_invariants(cells):
    g = GameHistory()
    for cell in cells:
        before_move = g.current_move
        before_len = len(g)
        mark = g.next_mark()
        if is_move_legal(g.current_board(), cell):
            g.apply_move(cell)
            assert g.current_move == before_move + 1
            assert g.next_mark() == mark.opponent()
            assert g.current_board()[cell] == mark
        else:
            with pytest.raises(IllegalMove):
                g.apply_move(cell)
            assert g.current_move == before_move
            assert len(g) == before_len

    assert g.history[0] == Board.empty()
    for n in range(1, len(g)):
        (changed,) = g.history[n].diff(g.history[n - 1])
        assert g.history[n - 1][changed] == Mark.EMPTY
        assert g.history[n][changed] == (Mark.X if n % 2 == 1 else Mark.O)


@given(
    st.lists(st.integers(min_value=0, max_value=8), unique=True, min_size=4, max_size=4),
    st.integers(min_value=0, max_value=8),
)
def test_jump_then_move_truncates(cells, k):
    g = GameHistory.from_moves(cells)
    assert len(g) == 5
    g.jump_to(2)
    if is_move_legal(g.current_board(), k):
        g.apply_move(k)
        assert len(g) == 4
    else:
        assert len(g) == 5


def test_numpy_integer_cells_and_moves_are_accepted():
    g = GameHistory()
    free = np.flatnonzero(g.current_board().cells == Mark.EMPTY.value)
    g.apply_move(free[4])
    assert g.current_board()[4] == Mark.X
    g.apply_move(np.int64(0))
    assert len(g) == 3
    g.jump_to(np.int64(1))
    assert g.current_move == 1
    assert type(g.current_move) is int
    with pytest.raises(IllegalMove) as exc:
        g.apply_move(np.int64(4))
    assert "occupied" in str(exc.value)
    with pytest.raises(OutOfRange):
        g.jump_to(np.int64(3))
