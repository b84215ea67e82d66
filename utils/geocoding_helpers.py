"""
Best-effort geocoding of destination pitch locations through Nominatim.
Failures never block a pitch; the coordinates simply stay empty.
"""
import logging
import httpx
from typing import Optional, Tuple

from config import GEOCODING_ENABLED, NOMINATIM_URL

logger = logging.getLogger("tripplanner.geocoding")


async def geocode_place_to_coords(
    place_query: str,
    timeout: float = 10.0
) -> Optional[Tuple[float, float, str]]:
    """
    Convert a place name/address to coordinates.

    Returns:
        (lat, lon, display_name) or None if geocoding fails or is disabled
    """
    if not GEOCODING_ENABLED or not place_query:
        return None
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.get(
                f"{NOMINATIM_URL}/search",
                params={
                    "q": place_query,
                    "format": "json",
                    "limit": 1,
                },
                headers={"User-Agent": "TripPlannerApp/1.0"}
            )
            resp.raise_for_status()
            data = resp.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Geocoding failed for %r: %s", place_query, exc)
        return None

    if not data:
        return None
    result = data[0]
    return (float(result["lat"]), float(result["lon"]), result.get("display_name", place_query))
