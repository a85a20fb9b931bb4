"""
Global pytest configuration and fixtures.
"""

import pytest

from secretenv.sdk.secrets import SecretResolver
from tests.fakes import FakeRunner


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def resolver(fake_runner) -> SecretResolver:
    """Resolver wired to the fake runner, dispatching as on Linux."""
    return SecretResolver(runner=fake_runner, timeout=30, platform="linux")
