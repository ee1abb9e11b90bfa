"""Tests for the synchronous DirectDecisionsClient."""

from __future__ import annotations

import json
import threading

import httpx
import pytest

from ddclient import (
    BadGatewayError,
    DirectDecisionsClient,
    ForbiddenError,
    HttpRequestError,
    InternalServerError,
    NotFoundError,
)

CONTENT_TYPE = "application/json; charset=utf-8"
VOTING_ID = "40f80454800b2bd7c172"

_RATE_HEADERS = {
    "X-RateLimit-Limit": "60",
    "X-RateLimit-Remaining": "59",
    "X-RateLimit-Reset": "42",
    "Retry-After": "0",
}


def _json_response(
    body: dict,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    return httpx.Response(status_code, json=body, headers=headers or {})


def _client(handler) -> DirectDecisionsClient:
    return DirectDecisionsClient(
        "sync-token", "http://test/", _transport=httpx.MockTransport(handler),
    )


class TestSyncClient:
    def test_create_voting(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.url.path == "/v1/votings"
            assert request.headers["authorization"] == "Bearer sync-token"
            assert request.headers["content-type"] == CONTENT_TYPE
            assert json.loads(request.content) == {"choices": ["a", "b"]}
            return _json_response({"id": "v", "choices": ["a", "b"]})

        with _client(handler) as c:
            voting = c.create_voting(["a", "b"])
        assert voting.id == "v"
        assert voting.choices == ["a", "b"]

    def test_set_choice(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == f"/v1/votings/{VOTING_ID}/choices"
            assert json.loads(request.content) == {"choice": "Galileo", "index": 0}
            return _json_response({"choices": ["Einstein", "Galileo"]})

        with _client(handler) as c:
            assert c.set_choice(VOTING_ID, "Galileo", 0) == ["Einstein", "Galileo"]

    def test_ballot_round(self):
        ballots: dict[str, dict[str, int]] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            voter = request.url.raw_path.decode().rsplit("/", 1)[-1]
            if request.method == "POST":
                revoted = voter in ballots
                ballots[voter] = json.loads(request.content)["ballot"]
                return _json_response({"revoted": revoted})
            if request.method == "GET":
                if voter not in ballots:
                    return _json_response({"code": 404, "message": "Not Found"}, 404)
                return _json_response({"ballot": ballots[voter]})
            ballots.pop(voter)
            return _json_response({"code": 200, "message": "OK"})

        with _client(handler) as c:
            assert c.vote(VOTING_ID, "ada", {"Kant": 1}) is False
            assert c.vote(VOTING_ID, "ada", {"Kant": 2}) is True
            assert c.get_ballot(VOTING_ID, "ada") == {"Kant": 2}
            c.unvote(VOTING_ID, "ada")
            with pytest.raises(NotFoundError):
                c.get_ballot(VOTING_ID, "ada")

    def test_voter_id_is_percent_encoded(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.raw_path == b"/v1/votings/v%231/ballots/a%2Fb%3Fc"
            return _json_response({"ballot": {"x": 1}})

        with _client(handler) as c:
            assert c.get_ballot("v#1", "a/b?c") == {"x": 1}

    def test_results_and_delete(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "DELETE":
                return _json_response({"code": 200, "message": "OK"})
            assert request.url.path.endswith("/results")
            return _json_response({
                "tie": False,
                "results": [{"choice": "a", "index": 0, "wins": 2, "percentage": 100.0}],
            })

        with _client(handler) as c:
            results = c.get_voting_results(VOTING_ID)
            c.delete_voting(VOTING_ID)
        assert results.results[0].strength == 0
        assert results.results[0].advantage == 0

    @pytest.mark.parametrize(
        "status_code,exc_cls",
        [(403, ForbiddenError), (502, BadGatewayError), (500, InternalServerError)],
    )
    def test_error_mapping(self, status_code, exc_cls):
        transport = httpx.MockTransport(lambda req: httpx.Response(status_code, text="boom"))
        with DirectDecisionsClient("t", "http://test", _transport=transport) as c:
            with pytest.raises(exc_cls):
                c.get_voting(VOTING_ID)

    def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with _client(handler) as c:
            with pytest.raises(HttpRequestError):
                c.delete_voting(VOTING_ID)
            assert c.get_rate() is None

    def test_rate_limit_tracking(self):
        transport = httpx.MockTransport(
            lambda req: _json_response({"id": "v", "choices": []}, headers=_RATE_HEADERS)
        )
        with DirectDecisionsClient("t", "http://test", _transport=transport) as c:
            c.get_voting("v")
            rate = c.get_rate()
        assert rate is not None
        assert rate.limit == 60
        assert rate.remaining == 59

    def test_shared_between_threads(self):
        transport = httpx.MockTransport(
            lambda req: _json_response({"id": "v", "choices": []}, headers=_RATE_HEADERS)
        )
        errors: list[BaseException] = []

        with DirectDecisionsClient("t", "http://test", _transport=transport) as c:

            def worker() -> None:
                try:
                    for _ in range(10):
                        c.get_voting("v")
                        assert c.get_rate() is not None
                except BaseException as exc:  # collected and re-checked below
                    errors.append(exc)

            threads = [threading.Thread(target=worker) for _ in range(8)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        assert errors == []

    def test_context_manager_lifecycle(self):
        transport = httpx.MockTransport(lambda req: _json_response({"id": "v", "choices": []}))
        client = DirectDecisionsClient("t", "http://test", _transport=transport)
        with client as c:
            c.get_voting("v")
        assert client._client.is_closed
