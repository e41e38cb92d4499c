"""Calorie lookup endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from dish_calories.api.auth import require_user
from dish_calories.api.models import CalorieRequest, CalorieResponse
from dish_calories.domain.errors import (
    CaloriesUnavailableError,
    DishNotFoundError,
    InvalidServingsError,
    NoMatchError,
    NutritionSourceError,
    SourceErrorKind,
)
from dish_calories.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from dish_calories.containers import AppContainer

router = APIRouter(prefix="/calories", tags=["calories"])

_logger = logging.getLogger(__name__)


@router.post("/get-calories", response_model=CalorieResponse)
async def get_calories(
    payload: CalorieRequest,
    request: Request,
    user: UserRecord = Depends(require_user),
) -> CalorieResponse:
    """Return calorie information for a dish."""
    container: AppContainer = request.app.state.container
    _logger.info(
        "Calorie request from %s: %s x %s servings",
        user.email,
        payload.dish_name,
        payload.servings,
    )
    try:
        result = await container.calorie_service.get_calories(
            payload.dish_name, payload.servings
        )
    except (DishNotFoundError, NoMatchError) as exc:
        _logger.info("Calorie lookup failed for %r: %s", payload.dish_name, exc)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "Dish not found",
                "message": (
                    f"We couldn't find nutrition information for "
                    f'"{payload.dish_name}". Try using a more specific or '
                    "common dish name."
                ),
            },
        ) from exc
    except InvalidServingsError as exc:
        _logger.info("Calorie lookup rejected for %r: %s", payload.dish_name, exc)
        raise HTTPException(
            status_code=422,
            detail={"error": "Invalid servings", "message": str(exc)},
        ) from exc
    except CaloriesUnavailableError as exc:
        _logger.info("Calorie lookup failed for %r: %s", payload.dish_name, exc)
        raise HTTPException(
            status_code=422,
            detail={
                "error": "Calories unavailable",
                "message": (
                    f'Calorie information is not available for "{payload.dish_name}". '
                    "Try a different dish name."
                ),
            },
        ) from exc
    except NutritionSourceError as exc:
        _logger.error(
            "Calorie lookup failed for %r (%s): %s", payload.dish_name, exc.kind, exc
        )
        raise _source_error(exc) from exc

    _logger.info(
        "Calorie data found for %r: %s total calories",
        payload.dish_name,
        result.total_calories,
    )
    return CalorieResponse(
        dish_name=result.dish_name,
        servings=result.servings,
        calories_per_serving=result.calories_per_serving,
        total_calories=result.total_calories,
        source=result.source,
        matched_food=result.matched_food,
        food_id=result.food_id,
    )


def _source_error(exc: NutritionSourceError) -> HTTPException:
    """Map a nutrition source failure to a user-facing response."""
    if exc.kind == SourceErrorKind.RATE_LIMITED:
        return HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "error": "Service temporarily unavailable",
                "message": "Too many requests. Please try again in a few minutes.",
            },
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={
            "error": "Unable to fetch calorie information",
            "message": (
                "Please try again with a different dish name or contact support "
                "if the problem persists."
            ),
        },
    )
