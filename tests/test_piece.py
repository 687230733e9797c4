import pytest

from tetris_piece import (KICKS, I_KICKS, JLSTZ_KICKS, PIECE_TYPES, SHAPES, Piece,
                          PieceType, rotated_shape)


def test_seven_closed_types():
    assert [t.value for t in PIECE_TYPES] == ["I", "J", "L", "O", "S", "T", "Z"]
    assert set(SHAPES) == set(KICKS) == set(PIECE_TYPES)
    with pytest.raises(ValueError):
        PieceType("X")


@pytest.mark.parametrize("t, x", [("I", 3), ("O", 4), ("T", 4), ("J", 4)])
def test_spawn_is_centered_at_top(t, x):
    p = Piece.spawn(t)
    assert (p.t, p.rotation, p.x, p.y) == (PieceType(t), 0, x, 0)


def test_t_rotations():
    base = SHAPES[PieceType.T]
    assert rotated_shape(base, 1) == [[0,1,0],[0,1,1],[0,1,0]]
    assert rotated_shape(base, 2) == [[0,0,0],[1,1,1],[0,1,0]]
    assert rotated_shape(base, 3) == [[0,1,0],[1,1,0],[0,1,0]]


def test_i_rotates_into_a_column():
    assert rotated_shape(SHAPES[PieceType.I], 1) == [[0,0,1,0]] * 4


@pytest.mark.parametrize("t", list(PieceType))
def test_four_clockwise_turns_restore_shape(t):
    p = Piece.spawn(t)
    original = p.shape
    for _ in range(4):
        p.rotate()
    assert p.rotation == 0
    assert p.shape == original


def test_cw_then_ccw_restores_rotation():
    p = Piece.spawn("L")
    p.rotate()
    p.rotate_counter_clockwise()
    assert p.rotation == 0
    p.rotate_counter_clockwise()
    assert p.rotation == 3


def test_shape_is_derived_not_shared():
    p = Piece.spawn("S")
    s = p.shape
    s[0][0] = 9
    assert p.shape[0][0] == 0
    assert SHAPES[PieceType.S][0][0] == 0


def test_movement_primitives_do_not_validate():
    p = Piece.spawn("O")
    for _ in range(10):
        p.move_left()
    p.move_down()
    p.move_right()
    assert (p.x, p.y) == (-5, 1)


def test_kick_tables_start_with_no_offset():
    for table in (JLSTZ_KICKS, I_KICKS):
        assert len(table) == 4
        for row in table:
            assert len(row) == 5 and row[0] == (0, 0)
    assert KICKS[PieceType.O] == [[(0, 0)]] * 4
    assert KICKS[PieceType.T] is JLSTZ_KICKS


def test_cells_include_rows_above_field():
    p = Piece(PieceType.I, 1, 0, -2)
    assert p.cells() == [(2, -2), (2, -1), (2, 0), (2, 1)]
