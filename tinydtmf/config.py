"""
Configuration
Parâmetros de síntese e reprodução DTMF.
"""

from dataclasses import dataclass, field

from tinydtmf.errors import ConfigurationError
from tinydtmf.media.dtmf import ToneWaveformSynthesizer


@dataclass
class DTMFConfig:
    """Configuração do sintetizador e do player"""

    sample_rate: int = field(default=8000)
    white_noise_fraction: int = field(default=40)  # gap = sample_rate / fraction
    append_silence: bool = field(default=True)
    tone_duration_ms: int = field(default=250)
    device_index: int | None = field(default=None)  # None = dispositivo padrão
    chunk_size: int = field(default=1024)

    def __post_init__(self):
        if self.sample_rate <= 0:
            raise ConfigurationError(f"Sample rate must be positive, got {self.sample_rate}")
        if self.white_noise_fraction <= 0:
            raise ConfigurationError(
                f"White noise fraction must be positive, got {self.white_noise_fraction}"
            )
        if self.tone_duration_ms < 0:
            raise ConfigurationError(
                f"Tone duration must not be negative, got {self.tone_duration_ms}"
            )
        if self.chunk_size <= 0:
            raise ConfigurationError(f"Chunk size must be positive, got {self.chunk_size}")

    def create_synthesizer(self) -> ToneWaveformSynthesizer:
        """Cria e inicializa um sintetizador com esta configuração"""
        synth = ToneWaveformSynthesizer(
            sample_rate=self.sample_rate,
            white_noise_fraction=self.white_noise_fraction,
            append_silence=self.append_silence,
        )
        synth.init(self.tone_duration_ms)
        return synth
