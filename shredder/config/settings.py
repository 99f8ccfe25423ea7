from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"

    noise_probability: float = Field(default=0.05, ge=0.0, le=1.0)
    noise_intensity: int = Field(default=2, ge=0, le=255)
    image_quality: int = Field(default=95, ge=1, le=100)

    display_value_max_length: int = Field(default=50, ge=1)
    blob_filter_length: int = Field(default=100, ge=1)

    output_prefix: str = "CLEAN_"
