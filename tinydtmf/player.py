"""
Playback sequencer
Reproduz strings, buffers e streams de símbolos DTMF em um AudioSink.
"""

from collections.abc import Iterable
from itertools import islice
from typing import IO

from tinydtmf.errors import DTMFError, InvalidSymbol, SinkFailure
from tinydtmf.logging_utils import RichDTMFLogger
from tinydtmf.media.audio import AudioSink
from tinydtmf.media.dtmf import DTMF_FREQS, ToneWaveformSynthesizer


class PlaybackSequencer:
    """Envia a forma de onda de cada símbolo ao sink, um por vez (bloqueante).

    `error_message` guarda a última falha; `last_error` a mesma falha tipada.
    """

    def __init__(self, synthesizer: ToneWaveformSynthesizer, sink: AudioSink):
        if not synthesizer.is_initialized:
            synthesizer.init()
        self.synth = synthesizer
        self.sink = sink
        self.error_message = "No error"
        self.last_error: DTMFError | None = None
        self._logger = RichDTMFLogger("tinydtmf.player")

    def _fail(self, error: DTMFError) -> bool:
        self.last_error = error
        self.error_message = str(error)
        return False

    def _submit(self, buffer: bytes) -> bool:
        result = self.sink.submit(buffer)
        if not result.ok:
            return self._fail(SinkFailure(result.error))
        return True

    def play_unit(self, unit: str | int) -> bool:
        """Reproduz um único caractere (str de tamanho 1 ou valor de byte)"""
        ch = chr(unit) if isinstance(unit, int) else unit
        if ch in ("a", "b", "c", "d"):
            ch = ch.upper()

        if ch == " ":
            buffer = self.synth.silence
        elif ch in DTMF_FREQS:
            buffer = self.synth.waveform(ch)
        else:
            return self._fail(InvalidSymbol(ch))

        self._logger.log_symbol(ch, len(buffer))
        ok = self._submit(buffer)
        # gap após cada símbolo, mesmo se o envio do tom falhou
        if self.synth.append_silence:
            ok = self._submit(self.synth.silence) and ok
        return ok

    def play(
        self, data: str | int | bytes | bytearray | Iterable, length: int | None = None
    ) -> bool:
        """Reproduz um símbolo ou uma sequência; para na primeira falha"""
        if isinstance(data, int) or (isinstance(data, str) and len(data) == 1):
            return self.play_unit(data)
        if length is not None:
            if length < 0:
                raise ValueError(f"Buffer length must not be negative, got {length}")
            data = islice(data, length)
        for unit in data:
            if not self.play_unit(unit):
                return False
        return True

    def play_stream(self, stream: IO, chunk_size: int = 1024) -> bool:
        """Reproduz um stream (ex.: stdin) até EOF ou primeira falha"""
        # read1() devolve o que já está disponível, sem esperar chunk_size bytes
        read = getattr(stream, "read1", stream.read)
        while chunk := read(chunk_size):
            self._logger.logger.debug(f"Read len: {len(chunk)}")
            if not self.play(chunk):
                return False
        return True
