"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from dish_calories.adapters.fdc_client import HttpxFdcClient
from dish_calories.adapters.supabase_user_repository import SupabaseUserRepository
from dish_calories.config import Settings
from dish_calories.services.cache import InMemoryCache
from dish_calories.services.calories import CalorieService
from dish_calories.services.nutrition import NutritionService
from dish_calories.services.security import TokenService
from dish_calories.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    nutrition_service: NutritionService
    calorie_service: CalorieService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_service = UserService(
        repository=SupabaseUserRepository(supabase_client),
        token_service=TokenService(
            secret=resolved_settings.jwt_secret,
            ttl_seconds=resolved_settings.jwt_ttl_seconds,
        ),
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
        timeout_seconds=resolved_settings.fdc_timeout_seconds,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(
            ttl_seconds=resolved_settings.search_cache_ttl_seconds,
            max_entries=resolved_settings.search_cache_max_entries,
        ),
        page_size=resolved_settings.fdc_page_size,
    )
    calorie_service = CalorieService(nutrition_service=nutrition_service)

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        nutrition_service=nutrition_service,
        calorie_service=calorie_service,
        close_resources=close_resources,
    )
