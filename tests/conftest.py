import pytest

from rangetree import diagnostics, timezone_utils


@pytest.fixture(autouse=True)
def reset_globals():
    """Config.load changes package-wide settings; restore them after each test."""
    tz = timezone_utils.get_timezone_name()
    debug = diagnostics.is_debug()
    yield
    timezone_utils.set_timezone(tz)
    diagnostics.set_debug(debug)
