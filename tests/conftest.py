from __future__ import annotations

from typing import Iterator

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_logger() -> Iterator[None]:
    # sinks added by the CLI point at captured streams
    yield
    logger.remove()
