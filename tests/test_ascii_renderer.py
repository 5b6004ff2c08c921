import pytest

from binstream.frame.types import BinFrame
from binstream.render.ascii import AsciiRenderer, downsample, format_centers
from binstream.render.session import TerminalSession
from binstream.stream.client import StreamClient, TerminatePolicy


class _StubChartRenderer(AsciiRenderer):
    def chart(self, series) -> str:
        self.last_series = list(series)
        return "<chart>"


class _IdleChannel:
    def __init__(self, url, listener) -> None:
        self.listener = listener

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass


class _RecordingText:
    def __init__(self) -> None:
        self.pages = []

    def show(self, text: str) -> None:
        self.pages.append(text)


def test_downsample_takes_every_fourth_bin_of_256() -> None:
    bins = [float(i) for i in range(256)]
    series = downsample(bins, 64)
    assert len(series) == 64
    assert series == [float(i) for i in range(0, 256, 4)]
    assert series[-1] == 252.0


def test_downsample_is_subsampling_not_averaging() -> None:
    bins = [0.0, 100.0] * 64
    assert downsample(bins, 64) == [0.0] * 64


def test_downsample_keeps_short_frames_whole() -> None:
    bins = [float(i) for i in range(100)]
    # stride is floor(100 / 64) == 1
    assert downsample(bins, 64) == bins
    assert downsample([], 64) == []


def test_downsample_rejects_non_positive_budget() -> None:
    with pytest.raises(ValueError):
        downsample([1.0], 0)
    with pytest.raises(ValueError):
        AsciiRenderer(max_points=0)


def test_centers_line_follows_the_frame() -> None:
    renderer = _StubChartRenderer()
    out = renderer.render(BinFrame(bins=(1.0, 2.0), centers=(20.04, 150.0, 21000.06)))
    assert out.splitlines()[-1] == "Centers: 20.0 Hz .. 21000.1 Hz"


def test_missing_centers_omit_the_line() -> None:
    out = _StubChartRenderer().render(BinFrame(bins=(1.0, 2.0, 3.0)))
    assert "Centers" not in out
    assert out.splitlines()[0] == "Audio log bins (3)"


def test_empty_centers_render_placeholders() -> None:
    assert format_centers(()) == "Centers: ? Hz .. ? Hz"


def test_renderer_downsamples_before_charting() -> None:
    renderer = _StubChartRenderer(max_points=64)
    renderer.render(BinFrame(bins=tuple(float(i) for i in range(256))))
    assert len(renderer.last_series) == 64


def test_empty_frame_has_header_only() -> None:
    assert _StubChartRenderer().render(BinFrame(bins=())) == "Audio log bins (0)"


def test_plotext_chart_is_text() -> None:
    out = AsciiRenderer(max_points=16, height=8).render(BinFrame(bins=tuple(float(i % 5) for i in range(32))))
    lines = out.splitlines()
    assert lines[0] == "Audio log bins (32)"
    assert len(lines) > 2


def test_terminal_session_writes_banner_and_chart() -> None:
    surface = _RecordingText()
    session = TerminalSession(surface, _StubChartRenderer(), display_name="Ada", display_age="7")
    session.accept(BinFrame(bins=(1.0,)))
    assert surface.pages == ["For Ada (7)\n\nAudio log bins (1)\n<chart>"]


def test_centers_sent_before_any_bins_reach_the_terminal() -> None:
    surface = _RecordingText()
    session = TerminalSession(surface, _StubChartRenderer())
    client = StreamClient("ws://test:1", session, TerminatePolicy(), channel_factory=_IdleChannel)
    client.connect()
    client.on_open()
    client.on_message('{"centers":[20, 19000]}')
    client.on_message('{"bins":[1,2,3]}')
    client.on_message('{"bins":[4,5,6],"centers":[1, 2]}')
    assert client.dropped == 1
    assert surface.pages == [
        "Audio log bins (3)\n<chart>\nCenters: 20.0 Hz .. 19000.0 Hz",
        "Audio log bins (3)\n<chart>\nCenters: 20.0 Hz .. 19000.0 Hz",
    ]
