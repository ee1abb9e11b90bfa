"""Direct Decisions Python client: typed access to the voting API."""

from __future__ import annotations

from ddclient.client import (
    DEFAULT_BASE_URL,
    AsyncDirectDecisionsClient,
    DirectDecisionsClient,
)
from ddclient.exceptions import (
    ApiError,
    BadGatewayError,
    BadRequestError,
    DecodeError,
    DirectDecisionsError,
    ForbiddenError,
    HttpRequestError,
    InternalServerError,
    MethodNotAllowedError,
    NotFoundError,
    OtherError,
    ServiceUnavailableError,
    TooManyRequestsError,
    TransportError,
    UnauthorizedError,
)
from ddclient.models import Rate, ValidationErrorCode
from ddclient.schemas import ChoiceStrength, Duel, Voting, VotingResult, VotingResults

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BASE_URL",
    "AsyncDirectDecisionsClient",
    "DirectDecisionsClient",
    "DirectDecisionsError",
    "ApiError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "MethodNotAllowedError",
    "TooManyRequestsError",
    "InternalServerError",
    "OtherError",
    "TransportError",
    "HttpRequestError",
    "DecodeError",
    "BadGatewayError",
    "ServiceUnavailableError",
    "Rate",
    "ValidationErrorCode",
    "Voting",
    "VotingResult",
    "VotingResults",
    "Duel",
    "ChoiceStrength",
]
