import pytest

from binstream.frame.types import BinRow
from binstream.render.history import DEFAULT_WIDTH, HistoryBuffer


def _row(*values: float) -> BinRow:
    return BinRow(values=tuple(float(v) for v in values))


def test_length_never_exceeds_capacity_and_keeps_last_rows_in_order() -> None:
    capacity = 5
    for k in range(0, 12):
        buf = HistoryBuffer(capacity)
        for i in range(capacity + k):
            buf.push(_row(i))
            assert len(buf) <= capacity
        assert [row.values[0] for row in buf] == [float(i) for i in range(k, capacity + k)]


def test_end_to_end_three_rows() -> None:
    buf = HistoryBuffer(3)
    for values in ([1, 0, 0], [0, 5, 0], [0, 0, 10]):
        buf.push(_row(*values))
    assert buf.current_width() == 3
    cells = buf.to_cells()
    assert len(cells) == 9
    lookup = {(c.x, c.y): c.value for c in cells}
    assert lookup[(2, 2)] == 10.0
    assert lookup[(0, 0)] == 1.0
    assert lookup[(1, 1)] == 5.0


def test_narrower_rows_read_as_zero_at_the_new_width() -> None:
    buf = HistoryBuffer(4)
    buf.push(_row(7))
    buf.push(_row(1, 2, 3))
    assert buf.current_width() == 3
    lookup = {(c.x, c.y): c.value for c in buf.to_cells()}
    assert lookup[(0, 0)] == 7.0
    assert lookup[(1, 0)] == 0.0
    assert lookup[(2, 0)] == 0.0
    # older rows keep their captured width
    assert [row.width for row in buf] == [1, 3]


def test_wider_rows_are_cut_to_the_current_width() -> None:
    buf = HistoryBuffer(4)
    buf.push(_row(1, 2, 3, 4))
    buf.push(_row(9, 8))
    assert buf.current_width() == 2
    assert len(buf.to_cells()) == 4


def test_to_array_matches_to_cells() -> None:
    buf = HistoryBuffer(3)
    buf.push(_row(1, 2))
    buf.push(_row(3, 4, 5))
    buf.push(_row(6))
    arr = buf.to_array()
    assert arr.shape == (3, 1)
    for cell in buf.to_cells():
        assert arr[cell.y, cell.x] == cell.value


def test_empty_buffer() -> None:
    buf = HistoryBuffer()
    assert buf.capacity == 200
    assert buf.current_width() == DEFAULT_WIDTH
    assert buf.to_cells() == []
    assert buf.to_array().shape == (0, DEFAULT_WIDTH)


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        HistoryBuffer(0)
