"""
Module 04 - Contract Collaborator

Narrow interface to the survey contract, an in-memory implementation and
the submission helpers.
"""

from .interface import (
    CallResult,
    ResolutionEvent,
    Clock,
    SystemClock,
    FrozenClock,
    PorpacleContract,
    hex_to_uint256,
)

from .memory import InMemoryPorpacle

from .submission import (
    submit_commitment,
    submit_survey,
)

__all__ = [
    "CallResult",
    "ResolutionEvent",
    "Clock",
    "SystemClock",
    "FrozenClock",
    "PorpacleContract",
    "hex_to_uint256",
    "InMemoryPorpacle",
    "submit_commitment",
    "submit_survey",
]
