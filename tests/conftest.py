from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Reset structlog configuration between tests."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
