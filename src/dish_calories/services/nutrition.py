"""Nutrition source service integrating USDA FDC."""

import logging
from dataclasses import dataclass

import httpx

from dish_calories.adapters.fdc_client import FdcClient
from dish_calories.domain.errors import NutritionSourceError, SourceErrorKind
from dish_calories.domain.nutrition import FoodCandidate, NutrientEntry
from dish_calories.services.cache import Cache

DEFAULT_PAGE_SIZE = 25

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Searches FDC for candidate foods, caching results per query."""

    fdc_client: FdcClient
    cache: Cache
    page_size: int = DEFAULT_PAGE_SIZE

    async def search(
        self, query: str, page_size: int | None = None
    ) -> list[FoodCandidate]:
        """Return candidate foods for a query, consulting the cache first."""
        trimmed = query.strip()
        page_size = page_size if page_size is not None else self.page_size
        cache_key = search_cache_key(trimmed, page_size)
        cached = self.cache.get(cache_key)
        if isinstance(cached, tuple):
            _logger.debug("Cache hit for query: %s", trimmed)
            return list(cached)

        try:
            payload = await self.fdc_client.search_foods(trimmed, page_size=page_size)
            foods = _parse_candidates(payload)
        except httpx.HTTPStatusError as exc:
            raise _classify_status_error(exc, trimmed) from exc
        except (
            httpx.HTTPError,
            ValueError,
            TypeError,
            KeyError,
            AttributeError,
        ) as exc:
            _logger.warning(
                "FDC search failed (query=%s, status=%s): %s",
                trimmed,
                _status_code_from_exception(exc),
                exc,
            )
            raise NutritionSourceError(
                SourceErrorKind.TRANSIENT,
                "Failed to fetch food data from USDA API",
            ) from exc

        self.cache.set(cache_key, tuple(foods))
        _logger.info("FDC search: query=%s results=%s", trimmed, len(foods))
        return foods


def search_cache_key(query: str, page_size: int) -> str:
    """Build the cache key for a trimmed, case-preserved query."""
    return f"search:{query}:{page_size}"


def _classify_status_error(
    exc: httpx.HTTPStatusError, query: str
) -> NutritionSourceError:
    """Map an FDC HTTP status to a nutrition source error."""
    status_code = exc.response.status_code
    _logger.warning(
        "FDC search failed (query=%s, status=%s): %s", query, status_code, exc
    )
    if status_code == httpx.codes.TOO_MANY_REQUESTS:
        return NutritionSourceError(
            SourceErrorKind.RATE_LIMITED,
            "USDA API rate limit exceeded. Please try again later.",
        )
    if status_code == httpx.codes.FORBIDDEN:
        return NutritionSourceError(
            SourceErrorKind.UNAUTHORIZED,
            "Invalid USDA API key or access denied.",
        )
    return NutritionSourceError(
        SourceErrorKind.TRANSIENT,
        "Failed to fetch food data from USDA API",
    )


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _parse_candidates(payload: object) -> list[FoodCandidate]:
    """Parse the FDC search payload into candidates."""
    if not isinstance(payload, dict):
        raise TypeError("FDC search payload is not an object")
    foods = payload.get("foods") or []
    if not isinstance(foods, list):
        raise TypeError("FDC search payload 'foods' is not a list")
    return [_parse_candidate(food) for food in foods]


def _parse_candidate(food: dict[str, object]) -> FoodCandidate:
    nutrients = food.get("foodNutrients") or []
    return FoodCandidate(
        fdc_id=food["fdcId"],
        description=_optional_text(food.get("description")) or "",
        brand_name=_optional_text(food.get("brandName")),
        ingredients=_optional_text(food.get("ingredients")),
        nutrients=tuple(_parse_nutrient(nutrient) for nutrient in nutrients),
    )


def _parse_nutrient(nutrient: dict[str, object]) -> NutrientEntry:
    """Parse both the flat search shape and the nested detail shape."""
    nutrient_info = nutrient.get("nutrient") or {}
    nutrient_id = nutrient.get("nutrientId") or nutrient_info.get("id")
    name = nutrient.get("nutrientName") or nutrient_info.get("name") or ""
    value = nutrient.get("value")
    if value is None:
        value = nutrient.get("amount")
    return NutrientEntry(
        nutrient_id=int(nutrient_id) if nutrient_id is not None else None,
        nutrient_name=str(name),
        value=float(value) if value is not None else None,
    )


def _optional_text(value: object) -> str | None:
    """Return text fields as strings, keeping missing values as None."""
    if value is None:
        return None
    return str(value)
