# audio.py
# Audio sinks for unsigned 8-bit mono PCM: PyAudio playback and WAV capture

import logging
import wave
from dataclasses import dataclass
from typing import Protocol

from tinydtmf.errors import IoFailure, SinkFailure


@dataclass
class SubmitResult:
    ok: bool
    error: str = ""


class AudioSink(Protocol):
    """Anything that accepts a PCM-U8 buffer and reports success or failure."""

    def submit(self, buffer: bytes) -> SubmitResult: ...


class PyAudioSink:
    """Blocking PyAudio output stream (mono, unsigned 8-bit)."""

    def __init__(self, sample_rate: int = 8000, device_index: int | None = None):
        self.sample_rate = sample_rate
        self.device_index = device_index
        self.p = None
        self.out_stream = None
        self._logger = logging.getLogger("tinydtmf.audio")

    def open(self) -> "PyAudioSink":
        try:
            import pyaudio
        except ImportError as e:
            raise SinkFailure("PyAudio not installed (pip install tinydtmf[audio])") from e

        self.p = pyaudio.PyAudio()
        try:
            self.out_stream = self.p.open(
                format=pyaudio.paUInt8,
                channels=1,
                rate=self.sample_rate,
                output=True,
                output_device_index=self.device_index,
            )
        except OSError as e:
            self.p.terminate()
            self.p = None
            raise SinkFailure(f"Can't open pcm: {e}") from e
        self._logger.debug(f"PyAudio output opened @ {self.sample_rate} Hz")
        return self

    def submit(self, buffer: bytes) -> SubmitResult:
        if not self.out_stream:
            return SubmitResult(False, "Output stream not open")
        try:
            self.out_stream.write(bytes(buffer), num_frames=len(buffer))
        except OSError as e:
            return SubmitResult(False, f"Stream write failed: {e}")
        return SubmitResult(True)

    def close(self):
        try:
            if self.out_stream:
                # stop_stream() blocks until queued frames are played
                self.out_stream.stop_stream()
                self.out_stream.close()
        finally:
            self.out_stream = None
            if self.p:
                self.p.terminate()
                self.p = None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()


class WaveFileSink:
    """Writes every submitted buffer to an 8-bit mono WAV file."""

    def __init__(self, path: str, sample_rate: int = 8000):
        self.path = path
        self.sample_rate = sample_rate
        self.frames_written = 0
        self._wf = None

    def open(self) -> "WaveFileSink":
        try:
            self._wf = wave.open(self.path, "wb")
        except OSError as e:
            raise IoFailure(f"Can't open output file ({e.strerror})", self.path) from e
        self._wf.setnchannels(1)
        self._wf.setsampwidth(1)
        self._wf.setframerate(self.sample_rate)
        return self

    def submit(self, buffer: bytes) -> SubmitResult:
        if not self._wf:
            return SubmitResult(False, "WAV file not open")
        try:
            self._wf.writeframes(bytes(buffer))
        except OSError as e:
            return SubmitResult(False, f"WAV write failed: {e}")
        self.frames_written += len(buffer)
        return SubmitResult(True)

    def close(self):
        if self._wf:
            try:
                self._wf.close()
            finally:
                self._wf = None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
