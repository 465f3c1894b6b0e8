"""Fixtures compartilhadas dos testes."""

import pytest

from tinydtmf.media.audio import SubmitResult
from tinydtmf.media.dtmf import ToneWaveformSynthesizer


class RecordingSink:
    """Sink que guarda cada buffer recebido."""

    def __init__(self):
        self.buffers: list[bytes] = []

    def submit(self, buffer: bytes) -> SubmitResult:
        self.buffers.append(bytes(buffer))
        return SubmitResult(True)


class FailingSink(RecordingSink):
    """Sink que falha a partir do envio número `fail_at` (0-based)."""

    def __init__(self, fail_at: int = 0, error: str = "snd_pcm_writei failed: Broken pipe"):
        super().__init__()
        self.fail_at = fail_at
        self.error = error

    def submit(self, buffer: bytes) -> SubmitResult:
        if len(self.buffers) >= self.fail_at:
            self.buffers.append(bytes(buffer))
            return SubmitResult(False, self.error)
        return super().submit(buffer)


@pytest.fixture(scope="session")
def synth():
    s = ToneWaveformSynthesizer()
    s.init()
    return s


@pytest.fixture
def sink():
    return RecordingSink()
