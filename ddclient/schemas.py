"""Pydantic models mirroring the JSON bodies exchanged with the API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class OkResponse(_Frozen):
    """Acknowledgement returned by DELETE endpoints."""

    code: int = Field(..., description="HTTP status code echoed by the server")
    message: str = Field(..., description="Human-readable status message")


class ErrorResponse(_Frozen):
    """Structured body of a 400 response."""

    code: int
    message: str
    errors: list[str] = Field(..., description="Raw validation error strings")


# ---------------------------------------------------------------------------
# /v1/votings
# ---------------------------------------------------------------------------


class VotingRequest(_Frozen):
    choices: list[str]


class Voting(_Frozen):
    """A voting and its ordered list of choices."""

    id: str = Field(..., description="Opaque voting identifier")
    choices: list[str] = Field(..., description="Choices in server order")


class SetChoiceRequest(_Frozen):
    choice: str
    index: int


class SetChoiceResponse(_Frozen):
    choices: list[str]


# ---------------------------------------------------------------------------
# /v1/votings/{id}/ballots/{voter}
# ---------------------------------------------------------------------------


class Ballot(_Frozen):
    """Mapping from choice to rank (1 is the highest preference)."""

    ballot: dict[str, int]


class VoteResponse(_Frozen):
    revoted: bool = Field(..., description="True if the voter replaced an earlier ballot")


# ---------------------------------------------------------------------------
# /v1/votings/{id}/results
# ---------------------------------------------------------------------------


class VotingResult(_Frozen):
    """Ranked outcome for a single choice."""

    choice: str
    index: int = Field(..., description="Position of the choice in the voting")
    wins: int = Field(..., description="Number of pairwise duels won")
    percentage: float
    strength: int = 0
    advantage: int = 0


class ChoiceStrength(_Frozen):
    index: int
    choice: str
    strength: int


class Duel(_Frozen):
    """Pairwise comparison of two choices."""

    left: ChoiceStrength
    right: ChoiceStrength


class VotingResults(_Frozen):
    """Computed results of a voting."""

    tie: bool = Field(..., description="True if more than one choice shares first place")
    results: list[VotingResult]
    duels: list[Duel] | None = None
