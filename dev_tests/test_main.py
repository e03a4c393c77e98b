"""
Tests for main.py - command line entrypoint.
"""

import os
from unittest.mock import patch

import main
from config import config


class TestMain:

    def test_runs_app_from_core_app_state(self):
        """
        Given: Explicit host and port flags
        When: main() is called
        Then: uvicorn serves core.app_state:app with those settings
        """
        with patch("uvicorn.run") as mock_run:
            main.main(["--host", "127.0.0.1", "--port", "9001"])

        mock_run.assert_called_once_with(
            "core.app_state:app",
            host="127.0.0.1",
            port=9001,
            reload=config.APP_RELOAD,
        )

    def test_extra_verbose_flag(self):
        original = config.EXTRA_VERBOSE
        try:
            with patch("uvicorn.run"), patch.dict(os.environ, {}, clear=False):
                main.main(["--extra-verbose"])
                assert os.environ["EXTRA_VERBOSE"] == "true"
            assert config.EXTRA_VERBOSE is True
        finally:
            config.EXTRA_VERBOSE = original
