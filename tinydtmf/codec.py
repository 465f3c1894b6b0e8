"""
Symbol codec
Conversão binário <-> pares de símbolos DTMF (nibble alto primeiro).
"""

import logging
from types import MappingProxyType
from typing import BinaryIO

from tinydtmf.errors import InvalidSymbol, IoFailure, TruncatedStream

SYMBOLS = "0123456789ABCD#*"

# Símbolo -> valor de 4 bits
SYMBOL_VALUES: MappingProxyType[str, int] = MappingProxyType(
    {s: i for i, s in enumerate(SYMBOLS)}
)

# Mesma tabela indexada por código ASCII (entrada em bytes)
_BYTE_VALUES: MappingProxyType[int, int] = MappingProxyType(
    {ord(s): i for i, s in enumerate(SYMBOLS)}
)

_logger = logging.getLogger("tinydtmf.codec")


def encode(data: bytes) -> str:
    """Converte bytes em símbolos, dois por byte"""
    return "".join(SYMBOLS[b >> 4] + SYMBOLS[b & 0x0F] for b in data)


def decode(symbols: str | bytes) -> bytes:
    """Converte pares de símbolos em bytes"""
    decoder = SymbolDecoder()
    out = decoder.feed(symbols)
    decoder.finish()
    return out


class SymbolDecoder:
    """Decoder incremental: mantém o nibble alto pendente entre chunks"""

    def __init__(self):
        self._upper: int | None = None
        self._position = 0

    @property
    def pending(self) -> bool:
        return self._upper is not None

    def feed(self, chunk: str | bytes) -> bytes:
        """Decodifica um chunk; InvalidSymbol aborta sem recuperar o byte parcial"""
        table = _BYTE_VALUES if isinstance(chunk, bytes | bytearray) else SYMBOL_VALUES
        out = bytearray()
        for ch in chunk:
            value = table.get(ch)
            if value is None:
                shown = chr(ch) if isinstance(ch, int) else ch
                raise InvalidSymbol(shown, self._position)
            if self._upper is None:
                self._upper = value << 4
            else:
                out.append(self._upper | value)
                self._upper = None
            self._position += 1
        return bytes(out)

    def finish(self) -> None:
        if self._upper is not None:
            raise TruncatedStream()


def encode_stream(src: BinaryIO, dst: BinaryIO, chunk_size: int = 1024) -> int:
    """Codifica `src` em `dst`; retorna número de bytes escritos"""
    written = 0
    while chunk := src.read(chunk_size):
        written += dst.write(encode(chunk).encode("ascii"))
    return written


def decode_stream(src: BinaryIO, dst: BinaryIO, chunk_size: int = 1024) -> int:
    """Decodifica `src` em `dst`; bytes já escritos permanecem em caso de erro"""
    decoder = SymbolDecoder()
    written = 0
    while chunk := src.read(chunk_size):
        written += dst.write(decoder.feed(chunk))
    decoder.finish()
    return written


class _PathFile:
    """Arquivo que converte OSError de leitura/escrita em IoFailure com o caminho"""

    def __init__(self, f: BinaryIO, path: str):
        self.f = f
        self.path = path

    def read(self, size: int = -1) -> bytes:
        try:
            return self.f.read(size)
        except OSError as e:
            raise IoFailure(f"Read error ({e.strerror})", self.path) from e

    def write(self, data: bytes) -> int:
        try:
            return self.f.write(data)
        except OSError as e:
            raise IoFailure(f"Write error ({e.strerror})", self.path) from e


def _transcode_file(input_path: str, output_path: str, transcode) -> int:
    try:
        src = open(input_path, "rb")
    except OSError as e:
        raise IoFailure(f"Can't open input file ({e.strerror})", input_path) from e
    with src:
        try:
            dst = open(output_path, "wb")
        except OSError as e:
            raise IoFailure(f"Can't open output file ({e.strerror})", output_path) from e
        try:
            with dst:
                return transcode(_PathFile(src, input_path), _PathFile(dst, output_path))
        except OSError as e:
            # flush pendente no close()
            raise IoFailure(f"Write error ({e.strerror})", output_path) from e


def encode_file(input_path: str, output_path: str) -> int:
    """Arquivo binário -> arquivo de símbolos"""
    written = _transcode_file(input_path, output_path, encode_stream)
    _logger.debug(f"Encoded {input_path} -> {output_path} ({written} symbols)")
    return written


def decode_file(input_path: str, output_path: str) -> int:
    """Arquivo de símbolos -> arquivo binário"""
    written = _transcode_file(input_path, output_path, decode_stream)
    _logger.debug(f"Decoded {input_path} -> {output_path} ({written} bytes)")
    return written
