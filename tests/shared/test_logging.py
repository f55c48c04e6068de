from __future__ import annotations

import logging

from txn_cli.shared.logging import configure_library_logging, get_logger


def test_logger_info_routes_to_stderr(capfd) -> None:
    logger = get_logger()

    logger.info("structured log to stderr")

    captured = capfd.readouterr()
    assert "structured log to stderr" in captured.err
    assert "structured log to stderr" not in captured.out


def test_logger_debug_only_when_verbose(capfd) -> None:
    get_logger().debug("hidden detail")
    get_logger(verbose=True).debug("visible detail")

    captured = capfd.readouterr()
    assert "hidden detail" not in captured.err
    assert "visible detail" in captured.err


def test_configure_library_logging_sets_level_once() -> None:
    library_logger = configure_library_logging(verbose=True)
    handler_count = len(library_logger.handlers)
    assert library_logger.level == logging.DEBUG

    library_logger = configure_library_logging(verbose=False)
    assert library_logger.level == logging.WARNING
    assert len(library_logger.handlers) == handler_count
