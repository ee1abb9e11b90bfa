"""Entry point for ``python -m ddclient``: walk through a voting end to end."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from ddclient.client import AsyncDirectDecisionsClient
from ddclient.config import settings
from ddclient.exceptions import DirectDecisionsError, NotFoundError
from ddclient.logging_config import setup_logging
from ddclient.schemas import VotingResults

logger = logging.getLogger(__name__)

DEMO_CHOICES = ["Einstein", "Maxwell", "Newton"]


async def run_demo(client: AsyncDirectDecisionsClient) -> VotingResults:
    """Create a voting, cast two ballots, add a choice, read results, clean up."""
    voting = await client.create_voting(DEMO_CHOICES)
    logger.info("Created voting %s with choices %s", voting.id, voting.choices)

    await client.vote(voting.id, "Leonardo", {"Einstein": 1, "Maxwell": 2, "Newton": 3})
    logger.info("Leonardo voted for Einstein in voting %s", voting.id)

    await client.vote(voting.id, "Michelangelo", {"Einstein": 3, "Maxwell": 2, "Newton": 1})
    logger.info("Michelangelo voted for Newton in voting %s", voting.id)

    choices = await client.set_choice(voting.id, "Galileo", 0)
    logger.info("Appended Galileo to the list of choices: %s", choices)

    results = await client.get_voting_results_duels(voting.id)
    for result in results.results:
        logger.info(
            "%d. %s wins=%d percentage=%.1f", result.index, result.choice,
            result.wins, result.percentage,
        )

    await client.delete_voting(voting.id)
    logger.info("Deleted voting %s", voting.id)

    try:
        await client.get_voting(voting.id)
    except NotFoundError:
        logger.info("Voting %s not found after deletion", voting.id)
    else:
        raise RuntimeError(f"Voting {voting.id} still exists after deletion")

    rate = client.get_rate()
    if rate is not None:
        logger.info("Rate limit: %d/%d remaining", rate.remaining, rate.limit)
    return results


async def _run(api_key: str, base_url: str, timeout: float) -> None:
    async with AsyncDirectDecisionsClient(api_key, base_url, timeout) as client:
        await run_demo(client)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Direct Decisions API demo")
    parser.add_argument(
        "--api-key", default=settings.api_key,
        help="API token (default: $DIRECTDECISIONS_API_KEY)",
    )
    parser.add_argument(
        "--base-url", default=settings.base_url,
        help=f"API root (default: {settings.base_url})",
    )
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument("--log-format", choices=["text", "json"], default=settings.log_format)
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_format)

    if not args.api_key:
        logger.error("No API key configured; pass --api-key or set DIRECTDECISIONS_API_KEY")
        return 2

    try:
        asyncio.run(_run(args.api_key, args.base_url, settings.timeout))
    except (DirectDecisionsError, ValueError, RuntimeError):
        logger.exception("Demo failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
