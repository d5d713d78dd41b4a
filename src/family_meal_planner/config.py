"""Configuration management - config-driven architecture."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8000, description="Bind port")
    reload: bool = Field(default=False, description="Auto-reload on code changes (development)")

    # Data
    data_dir: Path = Field(default=Path("data"), description="Directory for JSON persistence")
    redis_url: str | None = Field(default=None, description="Redis URL for cloud persistence")

    # Recipe service
    recipe_service_url: str | None = Field(
        default=None,
        description="Base URL of the recipe service used to resolve assignments",
    )
    recipe_service_timeout: float = Field(default=10.0, description="Recipe lookup timeout in seconds")

    # Planner rules
    config_dir: str = Field(default="", description="Directory holding meal_planner.yaml")


DEFAULT_PLANNER_RULES: dict[str, Any] = {
    "default_meal_slots": [
        {"id": "breakfast", "name": "Breakfast", "order": 1},
        {"id": "lunch", "name": "Lunch", "order": 2},
        {"id": "dinner", "name": "Dinner", "order": 3},
    ],
    "recipe_unavailable_title": "Recipe unavailable",
    "family_editors": {},
}


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Load YAML config file."""
    if not config_path.exists():
        return {}
    with config_path.open() as f:
        return yaml.safe_load(f) or {}


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()


@lru_cache
def get_planner_rules(config_dir_str: str = "") -> dict[str, Any]:
    """Load planner defaults from config, falling back to built-in values."""
    if not config_dir_str:
        config_dir = Path(__file__).parent.parent.parent / "config"
    else:
        config_dir = Path(config_dir_str)
    rules = load_yaml_config(config_dir / "meal_planner.yaml")
    return {**DEFAULT_PLANNER_RULES, **rules}
