"""
Error taxonomy
Exceções tipadas para síntese, transcodificação e reprodução DTMF.
"""

from enum import Enum


class ErrorKind(Enum):
    CONFIGURATION = "configuration"
    INVALID_SYMBOL = "invalid_symbol"
    TRUNCATED_STREAM = "truncated_stream"
    SINK_FAILURE = "sink_failure"
    IO_FAILURE = "io_failure"


class DTMFError(Exception):
    """Exceção base; `kind` identifica a categoria do erro"""

    kind: ErrorKind


class ConfigurationError(DTMFError):
    """Configuração inválida (ex.: sample rate zero)"""

    kind = ErrorKind.CONFIGURATION


class InvalidSymbol(DTMFError):
    """Caractere fora do alfabeto DTMF"""

    kind = ErrorKind.INVALID_SYMBOL

    def __init__(self, value: str, position: int | None = None):
        self.value = value
        self.position = position
        if position is None:
            super().__init__(f"Invalid DTMF symbol: {value!r}")
        else:
            super().__init__(f"Invalid DTMF symbol {value!r} at position {position}")


class TruncatedStream(DTMFError):
    """Stream de símbolos com número ímpar de caracteres"""

    kind = ErrorKind.TRUNCATED_STREAM

    def __init__(self, message: str = "Invalid trailing character: dangling high nibble"):
        super().__init__(message)


class SinkFailure(DTMFError):
    """Falha reportada pelo dispositivo de áudio (texto repassado sem alteração)"""

    kind = ErrorKind.SINK_FAILURE


class IoFailure(DTMFError):
    """Falha de abertura/leitura/escrita de arquivo"""

    kind = ErrorKind.IO_FAILURE

    def __init__(self, message: str, path: str):
        self.path = path
        super().__init__(f"{message}: {path}")
