"""Test fixtures for Link header parser tests."""

from pathlib import Path

import pytest
import safir.logging
import structlog
from structlog.stdlib import BoundLogger

from linkheader import LinkHeaderParser, ParserConfig


@pytest.fixture
def configured_logger() -> BoundLogger:
    safir.logging.configure_logging(
        name="linkheader",
        profile=safir.logging.Profile.development,
        log_level=safir.logging.LogLevel.DEBUG,
    )
    return structlog.get_logger("linkheader")


@pytest.fixture
def data_dir() -> Path:
    return Path(__file__).parent / "data"


@pytest.fixture
def parser(configured_logger: BoundLogger) -> LinkHeaderParser:
    return LinkHeaderParser(ParserConfig(), logger=configured_logger)
