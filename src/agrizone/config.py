"""Application configuration and settings management."""

from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="AGZ_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Agrizone Pickup Planning API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Level applied to the agrizone logger.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    coordinate_precision: int = Field(
        default=6,
        ge=0,
        le=15,
        description="Maximum decimal places accepted for a coordinate.",
    )
    default_average_speed_kmh: float = Field(
        default=40.0,
        gt=0.0,
        description="Average travel speed used to estimate route duration.",
    )
    two_opt_max_passes: int = Field(default=10, ge=0)
    two_opt_epsilon_km: float = Field(
        default=1e-4,
        ge=0.0,
        description="Minimum gain (km) for a 2-opt move to be accepted.",
    )
    suggested_radius_factor: float = Field(default=0.9, gt=0.0, le=1.0)
    max_alternative_zones: int = Field(default=3, ge=0)
    max_stops_per_route: int = Field(default=250, ge=1)
    circle_polygon_segments: int = Field(
        default=16,
        ge=1,
        description="Segments per quarter circle when drawing zone outlines.",
    )

    fuel_cost_per_km: float = Field(default=0.15, ge=0.0)
    time_cost_per_hour: float = Field(default=0.5, ge=0.0)
    fuel_litres_per_km: float = Field(default=0.08, ge=0.0)
    carbon_kg_per_km: float = Field(default=0.2, ge=0.0)

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        return str(value or "INFO").strip().upper()


settings = Settings()
