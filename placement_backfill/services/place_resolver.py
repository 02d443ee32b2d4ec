"""Place resolver backed by the LiteAPI places endpoint."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from placement_backfill.config import Settings
from placement_backfill.schemas.placement import (
    PlacesResponse,
    ResolutionResult,
    ResolutionStatus,
)

logger = logging.getLogger(__name__)


class PlaceResolver:
    """
    Resolve a location name to a placement id.

    Sends one geocode-typed text query per call and takes the placeId of
    the first candidate. A lookup that fails is reported the same way as a
    lookup with no match, so callers simply skip the location.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize place resolver.

        Args:
            settings: Backfill settings
            transport: Optional httpx transport, used in place of the network
        """
        self.settings = settings
        self.api_url = settings.lite_api_url
        self.transport = transport

    def _request_params(self, name: str) -> dict:
        return {
            "textQuery": name,
            "type": self.settings.places_search_type,
            "language": self.settings.places_language,
        }

    async def resolve(self, name: str) -> ResolutionResult:
        """
        Look up the placement id for a location name.

        Args:
            name: Location display name, used as the text query

        Returns:
            ResolutionResult carrying the first candidate's placeId, or an
            absent result with NO_MATCH or LOOKUP_FAILED status

        Raises:
            ValueError: If name is empty
        """
        if not name or not name.strip():
            raise ValueError("Location name must be a non-empty string")

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.http_timeout,
                follow_redirects=True,
                transport=self.transport
            ) as client:
                response = await client.get(
                    self.api_url,
                    params=self._request_params(name),
                    headers={"X-API-Key": self.settings.lite_api_key}
                )
                response.raise_for_status()
                payload = PlacesResponse.model_validate_json(response.content)

        except httpx.HTTPStatusError as e:
            logger.error(
                f'Error fetching placeId for "{name}": '
                f"Status {e.response.status_code} - {e.response.reason_phrase}"
            )
            return ResolutionResult.absent(ResolutionStatus.LOOKUP_FAILED)
        except httpx.TimeoutException as e:
            logger.error(f'Error fetching placeId for "{name}": request timeout ({e})')
            return ResolutionResult.absent(ResolutionStatus.LOOKUP_FAILED)
        except httpx.RequestError as e:
            logger.error(f'Error fetching placeId for "{name}": {e}')
            return ResolutionResult.absent(ResolutionStatus.LOOKUP_FAILED)
        except ValidationError as e:
            logger.error(
                f'Error fetching placeId for "{name}": malformed response '
                f"({e.error_count()} validation error(s))"
            )
            logger.debug(f"Places response validation detail: {e}")
            return ResolutionResult.absent(ResolutionStatus.LOOKUP_FAILED)

        if not payload.data or not payload.data[0].place_id:
            logger.info(f'No placeId found for "{name}"')
            return ResolutionResult.absent(ResolutionStatus.NO_MATCH)

        return ResolutionResult.found(payload.data[0].place_id)
