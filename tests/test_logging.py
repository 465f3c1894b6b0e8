"""Testes do logging com Rich."""

import io
import logging

from rich.console import Console

from tinydtmf.logging_utils import RichConsoleHandler, RichDTMFLogger


def _capture(name: str):
    buf = io.StringIO()
    logger = logging.getLogger(name)
    logger.handlers = [RichConsoleHandler(Console(file=buf, width=120))]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return buf


def test_error_panel_shows_type_and_text():
    buf = _capture("tinydtmf.test.error")
    RichDTMFLogger("tinydtmf.test.error").log_error(ValueError("bad [x] value"), "playback")
    out = buf.getvalue()
    assert "ERROR in playback" in out
    assert "ValueError: bad [x] value" in out


def test_symbol_log_names_space():
    buf = _capture("tinydtmf.test.symbol")
    dlog = RichDTMFLogger("tinydtmf.test.symbol")
    dlog.log_symbol(" ", 200)
    dlog.log_symbol("#", 2000)
    out = buf.getvalue()
    assert "SPACE (200 samples)" in out
    assert "# (2000 samples)" in out


def test_plain_message_not_markup():
    buf = _capture("tinydtmf.test.plain")
    logging.getLogger("tinydtmf.test.plain").info("Read len: [1024]")
    assert "Read len: [1024]" in buf.getvalue()
