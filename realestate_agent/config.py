"""Configuration settings for the real estate agent."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Input / output
    input_file: str = "realestates.txt"
    output_file: str = "report.txt"
    delimiter: str = "#"

    # Logging
    log_file: str | None = "realEstateApp.log"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_prefix": "REAGENT_"}


settings = Settings()
