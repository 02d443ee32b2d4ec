"""Sequential backfill of missing placement ids on location_l10n."""

import logging
from typing import List

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from placement_backfill.database import session_scope
from placement_backfill.models.location import LocationL10n
from placement_backfill.schemas.placement import (
    BackfillSummary,
    LocationCandidate,
    ResolutionStatus,
)
from placement_backfill.services.place_resolver import PlaceResolver

logger = logging.getLogger(__name__)


class PlacementBackfill:
    """
    Fill in placement ids for every location that lacks one.

    Locations are processed one at a time: each lookup and its write finish
    before the next location starts, which keeps the request rate against
    the places API at one in flight.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        resolver: PlaceResolver
    ):
        self.session_maker = session_maker
        self.resolver = resolver

    async def fetch_candidates(self, session: AsyncSession) -> List[LocationCandidate]:
        """Select the id and name of every row whose placement id is null."""
        query = (
            select(LocationL10n.location_id, LocationL10n.name)
            .where(LocationL10n.placement_id.is_(None))
            .order_by(LocationL10n.location_id)
        )
        result = await session.execute(query)
        return [LocationCandidate.model_validate(row) for row in result.all()]

    async def store_placement(
        self,
        session: AsyncSession,
        location_id: int,
        placement_id: str
    ) -> None:
        """Write one placement id and commit it."""
        stmt = (
            update(LocationL10n)
            .where(LocationL10n.location_id == location_id)
            .values(placement_id=placement_id)
            .execution_options(synchronize_session=False)
        )
        await session.execute(stmt)
        await session.commit()

    async def run(self) -> BackfillSummary:
        """
        Run the backfill once.

        Lookup failures are absorbed by the resolver and only cause the
        location to be skipped. Database errors propagate to the caller;
        updates committed before the error are kept.

        Returns:
            BackfillSummary with the run counters
        """
        async with session_scope(self.session_maker) as session:
            await session.connection()
            logger.info("Successfully connected to the database.")

            locations = await self.fetch_candidates(session)
            summary = BackfillSummary(total=len(locations))

            if not locations:
                logger.info("No locations found that need a placement_id. Exiting.")
                return summary

            logger.info(
                f"Found {summary.total} locations to process. Processing sequentially..."
            )

            for i, location in enumerate(locations, 1):
                if not location.name or not location.name.strip():
                    logger.warning(
                        f"[{i}/{summary.total}] Skipped location {location.location_id}: no name"
                    )
                    summary.skipped += 1
                    continue

                logger.info(f'[{i}/{summary.total}] Processing location: "{location.name}"...')
                result = await self.resolver.resolve(location.name)

                if not result.resolved:
                    if result.status is ResolutionStatus.LOOKUP_FAILED:
                        summary.failed += 1
                    else:
                        summary.no_match += 1
                    continue

                logger.info(
                    f'Updating location "{location.name}" (ID: {location.location_id}) '
                    f"with placement_id: {result.placement_id}"
                )
                await self.store_placement(session, location.location_id, result.placement_id)
                summary.updated += 1

            logger.info(
                f"Processing complete. Successfully updated {summary.updated} "
                f"of {summary.total} locations."
            )
            if summary.no_match or summary.failed or summary.skipped:
                logger.info(
                    f"Not updated: {summary.no_match} without a match, "
                    f"{summary.failed} failed lookups, {summary.skipped} skipped"
                )
            return summary
