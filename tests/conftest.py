import pytest
from click.testing import CliRunner

from ini_events.models import Callback


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def recorded() -> list[Callback]:
    """Collects callbacks when passed (via ``.append``) as a handler."""
    return []
