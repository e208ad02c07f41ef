"""Test configuration for pytest."""

import logging
import os
import pytest


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['STICKERCUT_LOG_LEVEL'] = 'WARNING'

    logging.getLogger().setLevel(logging.WARNING)

    # Naming failures are logged at ERROR and several tests trigger them on purpose
    for logger_name in ['stickercut.naming.gemini', 'stickercut.naming.session']:
        logging.getLogger(logger_name).setLevel(logging.CRITICAL)
