from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


LLMProvider = Literal["openai"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class OutputSettings(BaseSettings):
    """
    Everything needed to (re)generate images for an already enriched CSV.
    Values come from environment variables or a `.env` file in the working directory.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_api_key: SecretStr = Field(description="OpenAI API key")
    output_csv_path: Path = Field(description="Where the enriched CSV is written")
    images_dir: Path = Field(
        default=Path("./output/images"),
        description="Directory for downloaded images",
    )
    images_date_partitioned: bool = Field(
        default=True,
        description="Put images into a YYYY-MM-DD subdirectory of images_dir",
    )

    source_language: str = "German"
    target_language: str = "Russian"

    llm_provider: LLMProvider = "openai"
    llm_model: str = "gpt-3.5-turbo"
    llm_temperature: float = 0.3
    llm_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts per call on transient provider errors (rate limits, 5xx, connection)",
    )
    image_model: str = "dall-e-3"
    image_size: str = "1024x1024"
    image_quality: str = "standard"

    log_level: LogLevel = "INFO"


class Settings(OutputSettings):
    """Settings of the main enrichment run."""

    input_csv_path: Path = Field(description="Vocabulary CSV to enrich")
    strict: bool = Field(
        default=False,
        description="Abort the whole run on the first failed call instead of falling back",
    )
    generate_images: bool = True
