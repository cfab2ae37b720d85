"""
Test fixtures package for Porpoise tests.

This package provides factory functions for creating test objects:
- common.py: surveys, leaves, config, clock and contract factories

Usage:
    from fixtures import make_survey, make_contract

    def test_something():
        survey = make_survey(options=["Yes", "No"])
"""

from .common import (
    DEFAULT_DEADLINE,
    make_survey,
    make_text_leaves,
    make_clock,
    make_contract,
    make_config,
)

__all__ = [
    "DEFAULT_DEADLINE",
    "make_survey",
    "make_text_leaves",
    "make_clock",
    "make_contract",
    "make_config",
]
