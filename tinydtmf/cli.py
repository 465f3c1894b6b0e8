"""
Command line interface
Reproduz símbolos DTMF (string ou stdin) e converte arquivos binário <-> símbolos.
"""

import argparse
import sys

from rich.traceback import install

from tinydtmf import __version__
from tinydtmf.codec import decode_file, encode_file
from tinydtmf.config import DTMFConfig
from tinydtmf.errors import DTMFError
from tinydtmf.logging_utils import RichDTMFLogger, console, setup_logging
from tinydtmf.media.audio import PyAudioSink, WaveFileSink
from tinydtmf.player import PlaybackSequencer

_logger = RichDTMFLogger("tinydtmf.cli")

DESCRIPTION = """\
Reproduce a sequence of ascii tone representations (0123456789ABCD#*)
received on stdin, play a string given with -s, or convert a file to tone
coding (-b) and back (-t).

Stdin is played byte by byte and a newline is not a tone symbol:
`echo 123 | tinydtmf` stops at the trailing newline and exits 1,
use `printf 123 | tinydtmf` instead."""


class ArgumentParser(argparse.ArgumentParser):
    """Parser que sai com status 1 em erro de parâmetro"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: Invalid parameter or value: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = ArgumentParser(
        prog="tinydtmf",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("-b", "--binary", metavar="FILE", help="input file to convert to tones")
    parser.add_argument("-t", "--tones", metavar="FILE", help="tone file to convert back")
    parser.add_argument("-o", "--output", metavar="FILE", help="output file, required by -b/-t")
    parser.add_argument("-s", "--string", metavar="SYMBOLS", help="string of tones to play")
    parser.add_argument("-w", "--wav", metavar="FILE", help="write audio to a WAV file")
    parser.add_argument("-r", "--rate", type=int, default=8000, help="sample rate (Hz)")
    parser.add_argument("-l", "--length", type=int, default=250, help="tone length (ms)")
    parser.add_argument("--no-gap", action="store_true", help="no silence between tones")
    parser.add_argument("--device", type=int, default=None, help="PyAudio output device index")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level",
    )
    parser.add_argument("-h", "--help", action="store_true", help="print this help message")
    parser.add_argument("-V", "--version", action="store_true", help="version information")
    return parser


def validate_args(args: argparse.Namespace) -> str | None:
    """Retorna mensagem de erro se a combinação de opções for inválida"""
    if args.string is not None and (args.binary or args.tones or args.output):
        return "-s isn't compatible with these options: -b, -t, -o."
    if args.binary and args.tones:
        return "-b and -t are mutually exclusive."
    if bool(args.binary or args.tones) != bool(args.output):
        return "-b or -t requires -o and vice versa."
    if args.wav and (args.binary or args.tones):
        return "-w only applies to playback."
    return None


def open_sink(config: DTMFConfig, wav_path: str | None):
    if wav_path:
        return WaveFileSink(wav_path, config.sample_rate)
    return PyAudioSink(config.sample_rate, config.device_index)


def run_playback(config: DTMFConfig, symbols: str | None, wav_path: str | None) -> int:
    synth = config.create_synthesizer()
    with open_sink(config, wav_path) as sink:
        player = PlaybackSequencer(synth, sink)
        if symbols is not None:
            ok = player.play(symbols)
        else:
            ok = player.play_stream(sys.stdin.buffer, config.chunk_size)
    if not ok:
        _logger.log_error(player.last_error, "playback")
        return 1
    _logger.log_success("Playback finished")
    return 0


def run_transcode(args: argparse.Namespace) -> int:
    if args.binary:
        count = encode_file(args.binary, args.output)
        _logger.log_transcode("encode", args.binary, args.output, count)
    else:
        count = decode_file(args.tones, args.output)
        _logger.log_transcode("decode", args.tones, args.output, count)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.help:
        parser.print_help(sys.stderr)
        return 1
    if args.version:
        console.print(f"tinydtmf version: {__version__}")
        return 1

    error = validate_args(args)
    if error:
        console.print(f"[red]{error}[/red]\n")
        parser.print_usage(sys.stderr)
        return 1

    setup_logging(args.log_level)

    try:
        config = DTMFConfig(
            sample_rate=args.rate,
            tone_duration_ms=args.length,
            append_silence=not args.no_gap,
            device_index=args.device,
        )
        if args.binary or args.tones:
            return run_transcode(args)
        return run_playback(config, args.string, args.wav)
    except DTMFError as e:
        _logger.log_error(e, "tinydtmf")
        return 1
    except KeyboardInterrupt:
        console.print("\n🛑 [yellow]Interrupted[/yellow]")
        return 1


def entrypoint() -> None:
    # Instalar Rich traceback para exceções mais bonitas
    install(show_locals=False)
    sys.exit(main())


if __name__ == "__main__":
    entrypoint()
