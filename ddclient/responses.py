"""Translate raw HTTP responses into decoded models or typed exceptions."""

from __future__ import annotations

import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ddclient.exceptions import (
    BadGatewayError,
    BadRequestError,
    DecodeError,
    DirectDecisionsError,
    ForbiddenError,
    InternalServerError,
    MethodNotAllowedError,
    NotFoundError,
    OtherError,
    ServiceUnavailableError,
    TooManyRequestsError,
    UnauthorizedError,
)
from ddclient.models import Rate, ValidationErrorCode
from ddclient.schemas import ErrorResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Error strings the API may place in a 400 body. Both the phrase and the
# identifier spelling are accepted; anything else is ignored.
VALIDATION_CODES: dict[str, ValidationErrorCode] = {
    "Invalid data": ValidationErrorCode.INVALID_DATA,
    "InvalidData": ValidationErrorCode.INVALID_DATA,
    "Missing choices": ValidationErrorCode.MISSING_CHOICES,
    "MissingChoices": ValidationErrorCode.MISSING_CHOICES,
    "Choice too long": ValidationErrorCode.CHOICE_TOO_LONG,
    "ChoiceTooLong": ValidationErrorCode.CHOICE_TOO_LONG,
    "Too many choices": ValidationErrorCode.TOO_MANY_CHOICES,
    "TooManyChoices": ValidationErrorCode.TOO_MANY_CHOICES,
    "Choice required": ValidationErrorCode.CHOICE_REQUIRED,
    "ChoiceRequired": ValidationErrorCode.CHOICE_REQUIRED,
    "Ballot required": ValidationErrorCode.BALLOT_REQUIRED,
    "BallotRequired": ValidationErrorCode.BALLOT_REQUIRED,
    "Voter ID too long": ValidationErrorCode.VOTER_ID_TOO_LONG,
    "VoterIDTooLong": ValidationErrorCode.VOTER_ID_TOO_LONG,
    "Invalid voter ID": ValidationErrorCode.INVALID_VOTER_ID,
    "InvalidVoterID": ValidationErrorCode.INVALID_VOTER_ID,
}

# Statuses whose exception carries no payload.
_STATUS_MAP: dict[int, type[DirectDecisionsError]] = {
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    405: MethodNotAllowedError,
    502: BadGatewayError,
    503: ServiceUnavailableError,
}


def parse_validation_errors(errors: list[str]) -> list[ValidationErrorCode]:
    """Map raw error strings to known codes, silently dropping the rest."""
    return [VALIDATION_CODES[err] for err in errors if err in VALIDATION_CODES]


def _build_bad_request(response: httpx.Response) -> BadRequestError:
    try:
        body = ErrorResponse.model_validate_json(response.content)
    except PydanticValidationError:
        # An unreadable body is reported the same way as one without known codes.
        return BadRequestError([])
    return BadRequestError(parse_validation_errors(body.errors))


def build_exception(
    response: httpx.Response,
    rate: Rate | None = None,
) -> DirectDecisionsError:
    """Construct the exception for a non-200 *response*."""
    status = response.status_code
    exc_cls = _STATUS_MAP.get(status)
    if exc_cls is not None:
        return exc_cls()
    if status == 400:
        return _build_bad_request(response)
    if status == 429:
        return TooManyRequestsError(rate)
    if status == 500:
        return InternalServerError(response.text)
    return OtherError(status, response.text)


def interpret(
    response: httpx.Response,
    model: type[ModelT],
    rate: Rate | None = None,
) -> ModelT:
    """Decode a 200 *response* as *model*, or raise the mapped exception.

    *rate* is the snapshot taken from the same response; it is attached to
    :class:`TooManyRequestsError` so callers can back off.
    """
    if response.status_code == 200:
        try:
            return model.model_validate_json(response.content)
        except PydanticValidationError as exc:
            logger.warning("Undecodable %s body in 200 response", model.__name__)
            raise DecodeError(str(exc)) from exc
    raise build_exception(response, rate)
