"""Tests for the CLI log handler setup."""

from __future__ import annotations

import io
import logging

from rich.logging import RichHandler

from sendwave.log import configure_logging, reset_logging


def _cli_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger("sendwave").handlers if h.get_name() == "sendwave-cli"]


class TestConfigureLogging:
    def test_default_level_is_warning(self) -> None:
        configure_logging()
        assert logging.getLogger("sendwave").level == logging.WARNING

    def test_verbose_and_quiet_levels(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("sendwave").level == logging.DEBUG
        configure_logging(quiet=True)
        assert logging.getLogger("sendwave").level == logging.ERROR

    def test_repeated_calls_do_not_stack(self) -> None:
        configure_logging()
        configure_logging(verbose=True)
        assert len(_cli_handlers()) == 1

    def test_plain_handler_when_not_a_terminal(self, monkeypatch) -> None:
        monkeypatch.setattr("sys.stderr", io.StringIO())
        configure_logging()
        handler = _cli_handlers()[0]
        assert not isinstance(handler, RichHandler)
        assert "%(levelname)s" in handler.formatter._fmt

    def test_no_color_uses_plain_handler(self) -> None:
        configure_logging(no_color=True)
        assert not isinstance(_cli_handlers()[0], RichHandler)

    def test_records_reach_stderr(self, capfd) -> None:
        configure_logging()
        logging.getLogger("sendwave.client.request_client").warning("Received HTML instead of JSON")
        err = capfd.readouterr().err
        assert "WARNING" in err
        assert "Received HTML instead of JSON" in err

    def test_reset(self) -> None:
        configure_logging(verbose=True)
        reset_logging()
        assert _cli_handlers() == []
        assert logging.getLogger("sendwave").level == logging.NOTSET
