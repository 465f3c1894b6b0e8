# dtmf.py
# DTMF tone synthesis (unsigned 8-bit PCM, 8 kHz default)

import logging
import math
from types import MappingProxyType

from tinydtmf.errors import ConfigurationError, InvalidSymbol

# (low group, high group) in Hz
DTMF_FREQS: MappingProxyType[str, tuple[int, int]] = MappingProxyType(
    {
        "1": (697, 1209),
        "2": (697, 1336),
        "3": (697, 1477),
        "A": (697, 1633),
        "4": (770, 1209),
        "5": (770, 1336),
        "6": (770, 1477),
        "B": (770, 1633),
        "7": (852, 1209),
        "8": (852, 1336),
        "9": (852, 1477),
        "C": (852, 1633),
        "*": (941, 1209),
        "0": (941, 1336),
        "#": (941, 1477),
        "D": (941, 1633),
    }
)

PHASE_BITS = 16
PHASE_MASK = (1 << PHASE_BITS) - 1
PHASE_TO_RADIANS = 2.0 * math.pi / (1 << PHASE_BITS)

# u8 level of a zero-valued sample
SILENCE_LEVEL = 127


def phase_step(frequency: int, sample_rate: int) -> int:
    """Fixed-point phase increment per sample for a 16-bit circular phase."""
    return ((frequency << PHASE_BITS) // sample_rate) & PHASE_MASK


def fixed_sine(phase: int) -> float:
    """sin() of a 16-bit fixed-point phase (65536 == one full turn)."""
    return math.sin((phase & PHASE_MASK) * PHASE_TO_RADIANS)


def render_tone(f_low: int, f_high: int, n_samples: int, sample_rate: int) -> bytes:
    """Render the average of two sines as unsigned 8-bit samples."""
    step_low = phase_step(f_low, sample_rate)
    step_high = phase_step(f_high, sample_rate)
    c1 = 0
    c2 = 0
    buf = bytearray(n_samples)
    for n in range(n_samples):
        y = (fixed_sine(c1) + fixed_sine(c2)) * 0.5
        buf[n] = int((y + 1.0) * 127.0 + 0.5)
        c1 = (c1 + step_low) & PHASE_MASK
        c2 = (c2 + step_high) & PHASE_MASK
    return bytes(buf)


class ToneWaveformSynthesizer:
    """Pre-renders one PCM-U8 buffer per DTMF symbol plus a silence gap buffer.

    The silence buffer length depends only on the sample rate:
    ``sample_rate // white_noise_fraction`` samples (200 at 8 kHz, 1/40).
    """

    def __init__(
        self, sample_rate: int = 8000, white_noise_fraction: int = 40, append_silence: bool = True
    ):
        if sample_rate <= 0:
            raise ConfigurationError(f"Sample rate must be positive, got {sample_rate}")
        if white_noise_fraction <= 0:
            raise ConfigurationError(
                f"White noise fraction must be positive, got {white_noise_fraction}"
            )
        self.sample_rate = sample_rate
        self.white_noise_fraction = white_noise_fraction
        self.append_silence = append_silence
        self.silence = bytes([SILENCE_LEVEL]) * (sample_rate // white_noise_fraction)
        self._waveforms: dict[str, bytes] = {}
        self._tone_duration_ms: int | None = None
        self._logger = logging.getLogger("tinydtmf.synth")

    def init(self, tone_duration_ms: int = 250) -> None:
        """Render (or re-render) every symbol waveform."""
        if tone_duration_ms < 0:
            raise ConfigurationError(f"Tone duration must not be negative, got {tone_duration_ms}")
        n_samples = (tone_duration_ms * self.sample_rate) // 1000
        self._waveforms = {
            symbol: render_tone(f_low, f_high, n_samples, self.sample_rate)
            for symbol, (f_low, f_high) in DTMF_FREQS.items()
        }
        self._tone_duration_ms = tone_duration_ms
        self._logger.debug(
            f"Rendered {len(self._waveforms)} tones: {n_samples} samples @ {self.sample_rate} Hz"
        )

    @property
    def is_initialized(self) -> bool:
        return self._tone_duration_ms is not None

    @property
    def tone_duration_ms(self) -> int | None:
        return self._tone_duration_ms

    @property
    def sample_count(self) -> int:
        """Samples per symbol tone (0 before init)."""
        if not self._waveforms:
            return 0
        return len(self._waveforms["0"])

    def waveform(self, symbol: str) -> bytes:
        """Return the pre-rendered buffer for a symbol; a-d fold to upper case."""
        if not self.is_initialized:
            raise ConfigurationError("Synthesizer not initialized, call init() first")
        key = symbol.upper() if symbol in "abcd" and len(symbol) == 1 else symbol
        try:
            return self._waveforms[key]
        except KeyError:
            raise InvalidSymbol(symbol) from None
