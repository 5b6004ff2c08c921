from binstream.frame.decoder import FrameDecoder, coerce_number
from binstream.frame.types import BinRow


def test_non_numeric_bins_become_zero() -> None:
    decoder = FrameDecoder()
    frame = decoder.decode('{"bins":[1,2,"x",null]}')
    assert frame is not None
    assert frame.to_row() == BinRow(values=(1.0, 2.0, 0.0, 0.0))
    assert frame.centers is None


def test_malformed_payloads_yield_nothing_and_leave_state_alone() -> None:
    decoder = FrameDecoder()
    for payload in ("not json", '{"nope":1}', "[1, 2, 3]", "42", '{"bins": "1,2,3"}', ""):
        assert decoder.decode(payload) is None
    assert decoder.centers is None


def test_non_finite_and_odd_values_are_zeroed() -> None:
    decoder = FrameDecoder()
    frame = decoder.decode('{"bins":[NaN, Infinity, -Infinity, true, [1], {"a": 1}, "2.5", " ", -3]}')
    assert frame is not None
    assert frame.bins == (0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 2.5, 0.0, -3.0)


def test_centers_are_captured_once_per_session() -> None:
    decoder = FrameDecoder()
    first = decoder.decode('{"bins":[1],"centers":[20.0, 40.0]}')
    second = decoder.decode('{"bins":[2],"centers":[99.0, 199.0]}')
    assert first is not None and second is not None
    assert decoder.centers == (20.0, 40.0)
    assert first.centers == second.centers == (20.0, 40.0)


def test_centers_without_bins_are_remembered_but_yield_no_frame() -> None:
    decoder = FrameDecoder()
    assert decoder.decode('{"centers":[10, 20, 30]}') is None
    assert decoder.centers == (10.0, 20.0, 30.0)


def test_bytes_payloads_are_decoded_as_utf8() -> None:
    decoder = FrameDecoder()
    frame = decoder.decode(b'{"bins":[0.5, 0.25]}')
    assert frame is not None
    assert frame.bins == (0.5, 0.25)
    assert decoder.decode(b"\xff\xfe\x00") is None


def test_empty_bins_are_a_valid_zero_width_frame() -> None:
    frame = FrameDecoder().decode('{"bins":[]}')
    assert frame is not None
    assert frame.width == 0
    assert frame.to_row().peak == 0.0


def test_coerce_number_handles_strings() -> None:
    assert coerce_number("7") == 7.0
    assert coerce_number("nan") == 0.0
    assert coerce_number("inf") == 0.0
    assert coerce_number("x7") == 0.0
    assert coerce_number(None) == 0.0


def test_later_frames_keep_the_session_centers() -> None:
    decoder = FrameDecoder()
    decoder.decode('{"bins":[1],"centers":[1, 2]}')
    decoder.decode('{"centers":[5, 6]}')
    frame = decoder.decode('{"bins":[3],"centers":[7, 8]}')
    assert frame is not None
    assert frame.centers == (1.0, 2.0)


def test_centers_only_message_applies_to_following_frames() -> None:
    decoder = FrameDecoder()
    assert decoder.decode('{"centers":[20, 19000]}') is None
    frame = decoder.decode('{"bins":[1,2,3]}')
    assert frame is not None
    assert frame.centers == (20.0, 19000.0)
