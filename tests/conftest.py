import os
import sys
import pytest

# Add repository root to path so imports work without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from llava_server.command_line import (
    default_valued_option,
    integer,
    switch_option,
)


@pytest.fixture
def verbose_timeout_options():
    """A --verbose switch and a --timeout option defaulting to 30 seconds."""
    return [
        switch_option("--verbose", "Verbose", "Print more."),
        default_valued_option("--timeout", integer(1, 3600), "30", "Timeout", "Request timeout in seconds."),
    ]
