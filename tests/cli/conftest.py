from __future__ import annotations

from collections.abc import Iterator
from contextlib import suppress

import pytest
from loguru import logger

from hawaiidisco import cli


@pytest.fixture(autouse=True)
def _reset_cli_logging() -> Iterator[None]:
    yield
    if cli._LOG_HANDLER_ID is not None:
        with suppress(ValueError):
            logger.remove(cli._LOG_HANDLER_ID)
        cli._LOG_HANDLER_ID = None
