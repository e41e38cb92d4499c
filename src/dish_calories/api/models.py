"""Pydantic models for API payloads."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from dish_calories.domain.models import UserRecord

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    """Registration payload."""

    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email: str = Field(pattern=_EMAIL_PATTERN, max_length=254)
    password: str = Field(min_length=6, max_length=128)

    @field_validator("first_name", "last_name", "email")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


class LoginRequest(BaseModel):
    """Login payload."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserPayload(BaseModel):
    """Public user fields."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    created_at: datetime
    last_login_at: datetime | None = None

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserPayload":
        """Build the public view of a user record."""
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            created_at=user.created_at,
            last_login_at=user.last_login_at,
        )


class AuthResponse(BaseModel):
    """Response for register and login."""

    message: str
    user: UserPayload
    token: str


class CalorieRequest(BaseModel):
    """Calorie lookup payload."""

    dish_name: str = Field(min_length=1, max_length=100)
    servings: float = Field(gt=0, allow_inf_nan=False)

    @field_validator("dish_name", mode="before")
    @classmethod
    def _strip_dish_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class CalorieResponse(BaseModel):
    """Calorie lookup result."""

    dish_name: str
    servings: float
    calories_per_serving: int
    total_calories: int
    source: str
    matched_food: str
    food_id: int | str
