# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging_and_settings():
    """
    configure_logging() binds the current sys.stderr, which pytest swaps
    per test under capsys. Reset structlog and the settings cache so no
    test logs into another test's closed capture stream.
    """
    from tileweave.config import get_settings

    get_settings.cache_clear()
    yield
    structlog.reset_defaults()
    get_settings.cache_clear()
