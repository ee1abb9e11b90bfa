"""Async and sync HTTP clients for the Direct Decisions API."""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from ddclient.exceptions import HttpRequestError
from ddclient.models import Rate
from ddclient.rate import RateState
from ddclient.responses import ModelT, interpret
from ddclient.schemas import (
    Ballot,
    OkResponse,
    SetChoiceRequest,
    SetChoiceResponse,
    VoteResponse,
    Voting,
    VotingRequest,
    VotingResults,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.directdecisions.com/"
CONTENT_TYPE = "application/json; charset=utf-8"
USER_AGENT = "ddclient-py/0.1.0"

_URL_RE = re.compile(r"\b[a-zA-Z][a-zA-Z0-9+.-]*://\S+")


def normalize_base_url(base_url: str) -> str:
    """Validate *base_url* and make sure it ends with a ``/``."""
    url = httpx.URL(base_url)
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError(f"Invalid API URL: {base_url!r}")
    if not base_url.endswith("/"):
        base_url += "/"
    return base_url


def _default_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Accept": CONTENT_TYPE,
        "User-Agent": USER_AGENT,
    }


def _request_kwargs(body: BaseModel | None) -> dict[str, Any]:
    if body is None:
        return {}
    return {
        "json": body.model_dump(mode="json"),
        "headers": {"Content-Type": CONTENT_TYPE},
    }


def _redact(text: str) -> str:
    """Strip URLs from transport error messages."""
    return _URL_RE.sub("[redacted-url]", text)


def _voting_path(voting_id: str, suffix: str = "") -> str:
    return f"v1/votings/{quote(voting_id, safe='')}{suffix}"


def _ballot_path(voting_id: str, voter_id: str) -> str:
    return _voting_path(voting_id, f"/ballots/{quote(voter_id, safe='')}")


def _on_transport_error(method: str, path: str, exc: httpx.HTTPError) -> HttpRequestError:
    description = _redact(str(exc)) or type(exc).__name__
    logger.warning(
        "%s %s failed: %s", method, path, description,
        extra={"method": method, "path": path, "error": description},
    )
    return HttpRequestError(description)


def _on_response(method: str, path: str, response: httpx.Response) -> Rate | None:
    logger.debug(
        "%s %s -> %d", method, path, response.status_code,
        extra={"method": method, "path": path, "status_code": response.status_code},
    )
    return Rate.from_headers(response.headers)


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------


class AsyncDirectDecisionsClient:
    """Async client for the Direct Decisions API (backed by ``httpx.AsyncClient``).

    A single instance may be shared by concurrent tasks. The only state it
    keeps is the rate-limit snapshot of the last completed request, see
    :meth:`get_rate`.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        *,
        _transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = normalize_base_url(base_url)
        kwargs: dict[str, Any] = {
            "headers": _default_headers(token),
            "timeout": timeout,
        }
        if _transport is not None:
            kwargs["transport"] = _transport
        self._client = httpx.AsyncClient(**kwargs)
        self._rate = RateState()

    # -- context manager -----------------------------------------------------

    async def __aenter__(self) -> AsyncDirectDecisionsClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # -- internal ------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        body: BaseModel | None = None,
    ) -> tuple[httpx.Response, Rate | None]:
        try:
            response = await self._client.request(
                method, self._base_url + path, **_request_kwargs(body),
            )
        except httpx.HTTPError as exc:
            raise _on_transport_error(method, path, exc) from exc
        rate = _on_response(method, path, response)
        self._rate.set(rate)
        return response, rate

    async def _call(
        self,
        method: str,
        path: str,
        model: type[ModelT],
        body: BaseModel | None = None,
    ) -> ModelT:
        response, rate = await self._request(method, path, body)
        return interpret(response, model, rate)

    # -- public methods ------------------------------------------------------

    def get_rate(self) -> Rate | None:
        """Return the rate-limit snapshot from the latest response, if any."""
        return self._rate.get()

    async def create_voting(self, choices: list[str]) -> Voting:
        return await self._call(
            "POST", "v1/votings", Voting, VotingRequest(choices=choices),
        )

    async def get_voting(self, voting_id: str) -> Voting:
        return await self._call("GET", _voting_path(voting_id), Voting)

    async def delete_voting(self, voting_id: str) -> None:
        await self._call("DELETE", _voting_path(voting_id), OkResponse)

    async def set_choice(self, voting_id: str, choice: str, index: int) -> list[str]:
        """Add, move or remove a choice and return the updated choice list.

        The server interprets *index*: 0 appends, the current number of
        choices prepends, -1 removes an existing *choice*, and any other
        value inserts or moves the choice to that position.
        """
        resp = await self._call(
            "POST",
            _voting_path(voting_id, "/choices"),
            SetChoiceResponse,
            SetChoiceRequest(choice=choice, index=index),
        )
        return resp.choices

    async def vote(self, voting_id: str, voter_id: str, ballot: dict[str, int]) -> bool:
        """Submit *ballot* for *voter_id*; returns True if it replaced an earlier one."""
        resp = await self._call(
            "POST",
            _ballot_path(voting_id, voter_id),
            VoteResponse,
            Ballot(ballot=ballot),
        )
        return resp.revoted

    async def unvote(self, voting_id: str, voter_id: str) -> None:
        await self._call("DELETE", _ballot_path(voting_id, voter_id), OkResponse)

    async def get_ballot(self, voting_id: str, voter_id: str) -> dict[str, int]:
        resp = await self._call("GET", _ballot_path(voting_id, voter_id), Ballot)
        return resp.ballot

    async def get_voting_results(self, voting_id: str) -> VotingResults:
        return await self._call("GET", _voting_path(voting_id, "/results"), VotingResults)

    async def get_voting_results_duels(self, voting_id: str) -> VotingResults:
        return await self._call(
            "GET", _voting_path(voting_id, "/results/duels"), VotingResults,
        )


# ---------------------------------------------------------------------------
# Sync client
# ---------------------------------------------------------------------------


class DirectDecisionsClient:
    """Synchronous client for the Direct Decisions API (backed by ``httpx.Client``).

    Safe to share between threads.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        *,
        _transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = normalize_base_url(base_url)
        kwargs: dict[str, Any] = {
            "headers": _default_headers(token),
            "timeout": timeout,
        }
        if _transport is not None:
            kwargs["transport"] = _transport
        self._client = httpx.Client(**kwargs)
        self._rate = RateState()

    # -- context manager -----------------------------------------------------

    def __enter__(self) -> DirectDecisionsClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # -- internal ------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        body: BaseModel | None = None,
    ) -> tuple[httpx.Response, Rate | None]:
        try:
            response = self._client.request(
                method, self._base_url + path, **_request_kwargs(body),
            )
        except httpx.HTTPError as exc:
            raise _on_transport_error(method, path, exc) from exc
        rate = _on_response(method, path, response)
        self._rate.set(rate)
        return response, rate

    def _call(
        self,
        method: str,
        path: str,
        model: type[ModelT],
        body: BaseModel | None = None,
    ) -> ModelT:
        response, rate = self._request(method, path, body)
        return interpret(response, model, rate)

    # -- public methods ------------------------------------------------------

    def get_rate(self) -> Rate | None:
        """Return the rate-limit snapshot from the latest response, if any."""
        return self._rate.get()

    def create_voting(self, choices: list[str]) -> Voting:
        return self._call("POST", "v1/votings", Voting, VotingRequest(choices=choices))

    def get_voting(self, voting_id: str) -> Voting:
        return self._call("GET", _voting_path(voting_id), Voting)

    def delete_voting(self, voting_id: str) -> None:
        self._call("DELETE", _voting_path(voting_id), OkResponse)

    def set_choice(self, voting_id: str, choice: str, index: int) -> list[str]:
        resp = self._call(
            "POST",
            _voting_path(voting_id, "/choices"),
            SetChoiceResponse,
            SetChoiceRequest(choice=choice, index=index),
        )
        return resp.choices

    def vote(self, voting_id: str, voter_id: str, ballot: dict[str, int]) -> bool:
        resp = self._call(
            "POST",
            _ballot_path(voting_id, voter_id),
            VoteResponse,
            Ballot(ballot=ballot),
        )
        return resp.revoted

    def unvote(self, voting_id: str, voter_id: str) -> None:
        self._call("DELETE", _ballot_path(voting_id, voter_id), OkResponse)

    def get_ballot(self, voting_id: str, voter_id: str) -> dict[str, int]:
        return self._call("GET", _ballot_path(voting_id, voter_id), Ballot).ballot

    def get_voting_results(self, voting_id: str) -> VotingResults:
        return self._call("GET", _voting_path(voting_id, "/results"), VotingResults)

    def get_voting_results_duels(self, voting_id: str) -> VotingResults:
        return self._call("GET", _voting_path(voting_id, "/results/duels"), VotingResults)
