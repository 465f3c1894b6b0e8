"""TinyDTMF - DTMF tone playback and binary/symbol transcoding."""

__version__ = "0.1.0"
__author__ = "TinyDTMF Contributors"
__email__ = ""
__description__ = "A tiny DTMF tone player and data codec"

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "__description__",
]
