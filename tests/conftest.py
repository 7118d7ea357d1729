"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest
import structlog

from stablesurge.fees import SurgeFeeConfig
from stablesurge.models import PoolScenario, load_scenario
from stablesurge.simulator import PoolState

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the fixtures directory path."""
    return FIXTURES_DIR


@pytest.fixture
def scenarios_dir() -> Path:
    """Return the scenario fixtures directory path."""
    return SCENARIOS_DIR


def load_scenario_fixture(name: str) -> PoolScenario:
    """Load a scenario fixture by name.

    Args:
        name: Fixture name without extension (e.g., "surge_two_token")

    Returns:
        Parsed PoolScenario
    """
    return load_scenario(SCENARIOS_DIR / f"{name}.json")


@pytest.fixture
def surge_config() -> SurgeFeeConfig:
    """Static 1%, max surge 10%, threshold 20%."""
    return SurgeFeeConfig(
        static_fee_percentage=1.0,
        max_surge_fee_percentage=10.0,
        surge_threshold_percentage=20.0,
    )


@pytest.fixture
def balanced_pool(surge_config: SurgeFeeConfig) -> PoolState:
    """Two-token pool at [1000, 1000] with A = 100."""
    return PoolState.create([1000.0, 1000.0], amplification=100.0, fee_config=surge_config)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog.configure() a test performs."""
    yield
    structlog.reset_defaults()
