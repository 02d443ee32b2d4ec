"""Entry point for the placement backfill run.

Run with: update-placements   (or: python -m placement_backfill.main)
"""

import asyncio
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from placement_backfill.config import Settings
from placement_backfill.database import build_engine, build_session_maker
from placement_backfill.schemas.placement import BackfillSummary
from placement_backfill.services.batch_processor import PlacementBackfill
from placement_backfill.services.place_resolver import PlaceResolver

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for console output."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


async def run_backfill(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> Optional[BackfillSummary]:
    """
    Run one backfill against the configured database and places API.

    Any error raised while building the engine or running the batch
    processor is logged here. Once built, the engine is disposed on every
    exit path.

    Args:
        settings: Backfill settings
        transport: Optional httpx transport for the place resolver

    Returns:
        The run summary, or None if the run ended with an error
    """
    engine = None
    try:
        engine = build_engine(settings)
        processor = PlacementBackfill(
            build_session_maker(engine),
            PlaceResolver(settings, transport=transport)
        )
        return await processor.run()
    except Exception:
        logger.exception("An error occurred during the process")
        return None
    finally:
        if engine is not None:
            await engine.dispose()
            logger.info("Database connection closed.")


async def main() -> Optional[BackfillSummary]:
    """Load settings from the environment and run the backfill."""
    try:
        settings = Settings()
    except ValidationError as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e}")
        return None

    configure_logging(settings.log_level)
    summary = await run_backfill(settings)
    if summary is not None:
        logger.info(f"Summary: {summary}")
    return summary


def cli() -> None:
    """Console entry point: run one backfill to completion."""
    asyncio.run(main())


if __name__ == "__main__":
    cli()
