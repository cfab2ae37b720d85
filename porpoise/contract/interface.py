"""
Module 04 - Contract Interface

The survey contract is an external collaborator. It is reached only
through the narrow surface below: structured arguments in, a value or a
rejection with a reason string out. Hashes cross the boundary as
0x-prefixed hex literals.
"""

from __future__ import annotations

import time
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from porpoise.schemas.errors import ContractRejectionException


class CallResult(BaseModel):
    """Outcome of a state-changing contract call."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    accepted: bool = Field(..., description="Whether the call was accepted")
    value: Any = Field(default=None, description="Returned value, if any")
    reason: Optional[str] = Field(
        default=None,
        description="Rejection reason, exactly as reported by the contract",
    )
    method: Optional[str] = Field(default=None, description="Called method")

    @classmethod
    def ok(cls, value: Any = None, method: Optional[str] = None) -> "CallResult":
        return cls(accepted=True, value=value, method=method)

    @classmethod
    def rejected(cls, reason: str, method: Optional[str] = None) -> "CallResult":
        return cls(accepted=False, reason=reason, method=method)

    def unwrap(self) -> Any:
        """
        Return the value of an accepted call.

        Raises:
            ContractRejectionException: Carrying the contract's reason
        """
        if not self.accepted:
            raise ContractRejectionException(self.reason or "", method=self.method)
        return self.value


class ResolutionEvent(BaseModel):
    """Event emitted when a survey's result is recorded."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    survey: int = Field(..., ge=0, description="Survey identifier (uint256)")
    outcome: int = Field(..., ge=0, description="Recorded outcome (uint256)")


class Clock(Protocol):
    """
    Protocol for the time source deadlines are checked against.

    Returns unix seconds. Can be real time or frozen for deterministic
    testing.
    """
    def now(self) -> int:
        ...


class SystemClock:
    """Wall-clock time."""

    def now(self) -> int:
        return int(time.time())


class FrozenClock:
    """
    Frozen clock for deterministic testing.

    Always returns the same time until moved.
    """

    def __init__(self, frozen_time: int = 1_767_225_600) -> None:
        self._time = frozen_time

    def now(self) -> int:
        return self._time

    def set_time(self, value: int) -> None:
        self._time = value

    def advance(self, seconds: int) -> None:
        self._time += seconds


@runtime_checkable
class PorpacleContract(Protocol):
    """Read/write surface of the survey contract."""

    def domains(self, index: int) -> str:
        """Domain registered at index."""
        ...

    def register_survey(self, root: str, deadline: int) -> CallResult:
        """
        Register a survey commitment root with its deadline.

        Args:
            root: Survey Merkle root (0x-prefixed)
            deadline: Deadline, unix seconds
        """
        ...

    def record_result(self, survey: int, outcome: int) -> CallResult:
        """Record the outcome of a survey; emits a ResolutionEvent."""
        ...

    def verify(self, proof: Sequence[str], root: str, leaf: str) -> bool:
        """Check a sorted-pair inclusion proof of leaf against root."""
        ...


def hex_to_uint256(value: str) -> int:
    """Read a 0x-prefixed hash as the uint256 the contract stores."""
    return int(value, 16)


__all__ = [
    "CallResult",
    "ResolutionEvent",
    "Clock",
    "SystemClock",
    "FrozenClock",
    "PorpacleContract",
    "hex_to_uint256",
]
