"""
Tests for the API server launcher.
"""

from unittest.mock import patch

import run_api
from bookstore.config import config


def test_main_starts_uvicorn_with_config():
    with patch("run_api.uvicorn.run") as mock_run:
        run_api.main()

    mock_run.assert_called_once_with(
        "bookstore.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower(),
        access_log=True
    )
