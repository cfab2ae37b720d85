"""
Common test fixtures shared by all modules.

Provides factory functions for:
- Survey
- Text leaves
- RuntimeConfig
- FrozenClock / InMemoryPorpacle
"""

from typing import Any, Optional

from porpoise.config.runtime import RuntimeConfig
from porpoise.contract.interface import FrozenClock
from porpoise.contract.memory import InMemoryPorpacle
from porpoise.crypto.hashing import sha256
from porpoise.survey.models import Survey


# 2026-12-31T23:59:59Z
DEFAULT_DEADLINE = 1_798_761_599

# 2026-01-01T00:00:00Z
DEFAULT_NOW = 1_767_225_600


def make_survey(
    question: str = "Will the ferry run on schedule next Monday?",
    deadline: int = DEFAULT_DEADLINE,
    options: Optional[list[str]] = None,
) -> Survey:
    """
    Create a Survey for testing.

    Defaults to two options, so the survey has four fields and needs no
    padding.
    """
    if options is None:
        options = ["Yes", "No"]
    return Survey(question=question, deadline=deadline, options=options)


def make_text_leaves(count: int, prefix: str = "leaf") -> list[bytes]:
    """Leaves sha256(f"{prefix}{i}") for i in range(count)."""
    return [sha256(f"{prefix}{i}".encode()) for i in range(count)]


def make_config(**merkle: Any) -> RuntimeConfig:
    """RuntimeConfig with defaults, merkle section overridable by keyword."""
    return RuntimeConfig.from_dict({"merkle": merkle} if merkle else {})


def make_clock(now: int = DEFAULT_NOW) -> FrozenClock:
    return FrozenClock(now)


def make_contract(
    clock: Optional[FrozenClock] = None,
    config: Optional[RuntimeConfig] = None,
) -> InMemoryPorpacle:
    config = config or make_config()
    return InMemoryPorpacle(config=config.contract, clock=clock or make_clock())
