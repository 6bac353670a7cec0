"""Shared fixtures for all tests."""

import pytest
import structlog

from heroforge.character import CharacterSheet
from heroforge.config import get_settings
from heroforge.rules import Ruleset, get_ruleset, load_ruleset


class FixedRoller:
    """Die roller returning queued values, recording each requested range."""

    def __init__(self, *values: int) -> None:
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return self.values.pop(0)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep tests independent of the developer's environment and cached state.

    Clears HEROFORGE_* variables, the cached settings and ruleset, and any
    structlog configuration a test installed.
    """
    for name in (
        "HEROFORGE_PERSISTENCE_URL",
        "HEROFORGE_PERSISTENCE_TIMEOUT_SECONDS",
        "HEROFORGE_RULES_PATH",
        "HEROFORGE_LOG_LEVEL",
        "HEROFORGE_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_ruleset.cache_clear()

    yield

    get_settings.cache_clear()
    get_ruleset.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def ruleset() -> Ruleset:
    """The ruleset bundled with the package."""
    return load_ruleset(get_settings().bundled_rules_path)


@pytest.fixture
def sheet(ruleset: Ruleset) -> CharacterSheet:
    """A character sheet in the default state."""
    return CharacterSheet(ruleset=ruleset)


@pytest.fixture
def roller_factory():
    """Build deterministic die rollers."""
    return FixedRoller
