"""Testes do sequenciador de reprodução."""

import io
import os
import threading
import time

import pytest
from conftest import FailingSink, RecordingSink

from tinydtmf.errors import ErrorKind
from tinydtmf.media.dtmf import ToneWaveformSynthesizer
from tinydtmf.player import PlaybackSequencer


@pytest.fixture
def player(synth, sink):
    return PlaybackSequencer(synth, sink)


@pytest.mark.unit
def test_initial_error_state(player):
    assert player.error_message == "No error"
    assert player.last_error is None


@pytest.mark.unit
def test_play_symbol_appends_gap(player, synth, sink):
    assert player.play("5")
    assert sink.buffers == [synth.waveform("5"), synth.silence]


@pytest.mark.unit
def test_play_without_gap(sink):
    synth = ToneWaveformSynthesizer(append_silence=False)
    player = PlaybackSequencer(synth, sink)
    assert synth.is_initialized
    assert player.play("#*")
    assert sink.buffers == [synth.waveform("#"), synth.waveform("*")]


@pytest.mark.unit
def test_space_plays_silence(player, synth, sink):
    assert player.play(" ")
    assert sink.buffers == [synth.silence, synth.silence]


@pytest.mark.unit
def test_case_folding(synth):
    lower, upper = RecordingSink(), RecordingSink()
    assert PlaybackSequencer(synth, lower).play("a")
    assert PlaybackSequencer(synth, upper).play("A")
    assert lower.buffers == upper.buffers


@pytest.mark.unit
def test_invalid_character_does_not_touch_sink(player, sink):
    assert not player.play("Z")
    assert sink.buffers == []
    assert player.last_error.kind is ErrorKind.INVALID_SYMBOL
    assert "'Z'" in player.error_message


@pytest.mark.unit
def test_sequence_stops_at_first_invalid(player, synth, sink):
    assert not player.play("12x3")
    assert sink.buffers == [synth.waveform("1"), synth.silence, synth.waveform("2"), synth.silence]
    assert player.last_error.value == "x"


@pytest.mark.unit
@pytest.mark.parametrize(
    "data",
    [
        "1A*",
        b"1A*",
        bytearray(b"1a*"),
        ["1", "a", "*"],
        [ord("1"), ord("A"), ord("*")],
    ],
)
def test_input_shapes(synth, data):
    sink = RecordingSink()
    assert PlaybackSequencer(synth, sink).play(data)
    tones = sink.buffers[::2]
    assert tones == [synth.waveform("1"), synth.waveform("A"), synth.waveform("*")]


@pytest.mark.unit
def test_single_byte_value(player, synth, sink):
    assert player.play(ord("7"))
    assert sink.buffers[0] == synth.waveform("7")


@pytest.mark.unit
def test_bounded_buffer(player, synth, sink):
    """Apenas os primeiros `length` itens do buffer são reproduzidos."""
    assert player.play(b"12ZZZZ", 2)
    assert sink.buffers[::2] == [synth.waveform("1"), synth.waveform("2")]


@pytest.mark.unit
def test_empty_sequence(player, sink):
    assert player.play("")
    assert sink.buffers == []


@pytest.mark.unit
def test_sink_failure_is_reported_verbatim(synth):
    sink = FailingSink(fail_at=0, error="Short write (expected: 2000 wrote: 12)")
    player = PlaybackSequencer(synth, sink)
    assert not player.play("123")
    assert player.error_message == "Short write (expected: 2000 wrote: 12)"
    assert player.last_error.kind is ErrorKind.SINK_FAILURE
    # gap é enviado mesmo após falha do tom; a sequência para
    assert sink.buffers == [synth.waveform("1"), synth.silence]


@pytest.mark.unit
def test_gap_failure_halts_sequence(synth):
    sink = FailingSink(fail_at=1)
    player = PlaybackSequencer(synth, sink)
    assert not player.play("12")
    assert len(sink.buffers) == 2
    assert player.last_error.kind is ErrorKind.SINK_FAILURE


@pytest.mark.unit
def test_error_message_overwritten(player):
    player.play("Z")
    player.play("Y")
    assert "'Y'" in player.error_message


@pytest.mark.unit
def test_play_stream_binary(player, synth, sink):
    assert player.play_stream(io.BytesIO(b"0123456789ABCD#*"), chunk_size=5)
    assert len(sink.buffers) == 32


@pytest.mark.unit
def test_play_stream_text(player, synth, sink):
    assert player.play_stream(io.StringIO("9 9"))
    assert sink.buffers[::2] == [synth.waveform("9"), synth.silence, synth.waveform("9")]


@pytest.mark.unit
def test_play_stream_stops_on_failure(player, sink):
    assert not player.play_stream(io.BytesIO(b"12\n34"), chunk_size=2)
    assert len(sink.buffers) == 4
    assert player.last_error.value == "\n"


@pytest.mark.unit
def test_bounded_generator(player, synth, sink):
    assert player.play((c for c in "12ZZ"), 2)
    assert sink.buffers[::2] == [synth.waveform("1"), synth.waveform("2")]


@pytest.mark.unit
def test_negative_length_rejected(player, sink):
    with pytest.raises(ValueError):
        player.play("123", -1)
    assert sink.buffers == []


@pytest.mark.integration
def test_play_stream_does_not_wait_for_full_chunk(player, synth, sink):
    """Símbolos de um pipe aberto tocam antes do EOF."""
    r, w = os.pipe()
    os.write(w, b"12")
    result = []
    with os.fdopen(r, "rb") as stream:
        t = threading.Thread(target=lambda: result.append(player.play_stream(stream)))
        t.start()
        deadline = time.monotonic() + 2.0
        while len(sink.buffers) < 4 and time.monotonic() < deadline:
            time.sleep(0.01)
        played = len(sink.buffers)
        os.close(w)
        t.join(timeout=2.0)
    assert played == 4
    assert result == [True]
    assert sink.buffers[::2] == [synth.waveform("1"), synth.waveform("2")]
