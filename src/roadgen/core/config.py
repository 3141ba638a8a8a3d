"""
Configuration settings for road generation.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Road generation settings with environment variable support.

    Attributes:
        environment: Deployment environment, drives logging defaults
        log_level: Explicit log level (falls back to environment default)
        default_seed: Base seed used when a network is built without one
        edge_margin: Width of the border ring the search never enters
        base_step_cost: Cost of a single grid step
        turn_penalty: Extra cost for changing direction
        terrain_cost_scale: Multiplier applied to a cell's movement cost
        max_expansions: Node expansion cap per search (None = grid-sized cap)
        max_workers: Thread count for batch road construction
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="ROADGEN_",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Optional[str] = None

    # Generation
    default_seed: int = 0

    # Pathfinding costs
    edge_margin: int = Field(default=1, ge=0)
    base_step_cost: int = Field(default=10, gt=0)
    turn_penalty: int = Field(default=3, ge=0)
    terrain_cost_scale: float = Field(default=4.0, ge=0)
    max_expansions: Optional[int] = Field(default=None, gt=0)

    # Batch construction
    max_workers: Optional[int] = Field(default=None, gt=0)

    @property
    def is_development(self) -> bool:
        """Whether running in the development environment."""
        return self.environment == "development"


# Global settings instance
settings = Settings()
