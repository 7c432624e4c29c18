"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Simulation settings pulled from environment variables."""

    # Simulation
    viscosity_coef: float = Field(
        default=0.01,
        gt=0,
        description="Water below this depth or height difference does not flow",
    )
    rain_density: float = Field(
        default=1.0, ge=0, description="Rain falling onto one point in one step"
    )
    check_potential: bool = Field(
        default=False, description="Verify the potential function after each pass"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")

    class Config:
        env_prefix = "RAINFLOW_"
        env_file = ".env"
        extra = "ignore"


settings = Settings()
