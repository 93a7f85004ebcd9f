"""Environment-driven settings.

Values are read from ``SYNTHMIND_*`` environment variables or a local
``.env`` file. Every field has a default so the engine runs offline with
no configuration at all; only ``hf_api_token`` is needed to reach the
hosted model.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SYNTHMIND_",
        env_file=".env",
        extra="ignore",
    )

    # Text generation (Hugging Face inference API)
    hf_api_token: Optional[SecretStr] = None
    hf_model_id: str = "google/gemma-2b-it"
    hf_api_base: str = "https://api-inference.huggingface.co/models"
    max_new_tokens: int = Field(default=150, ge=1)
    temperature: float = Field(default=0.7, ge=0.0)
    request_timeout: float = Field(default=60.0, gt=0.0)

    # Scheduler
    cycle_interval: float = Field(default=12.0, gt=0.0)  # seconds between cycles
    dream_duration: float = Field(default=8.0, ge=0.0)  # seconds spent in DREAM mode

    # External stimuli
    use_real_internet: bool = False
    web_lookup_url: str = "https://api.duckduckgo.com/"

    # Persistence
    state_file: Optional[Path] = None

    @property
    def model_url(self) -> str:
        return f"{self.hf_api_base.rstrip('/')}/{self.hf_model_id}"


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings instance."""
    return Settings()
