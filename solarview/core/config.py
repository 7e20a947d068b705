"""
Centralized application configuration implementing the 12-Factor App methodology.
Every tunable of the tracking panel is read from environment variables or a .env file.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Immutable configuration schema backed by environment variables."""

    APP_NAME: str = "SolarView Pro"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Keyed JSON documents live in a single table; SQLite is enough for the single-writer panel
    DATABASE_URL: str = "sqlite:///./solarview.db"

    LOG_LEVEL: str = "INFO"

    # Dragging a card to "Agendado" without a date books the visit this many days ahead
    AUTO_SCHEDULE_DAYS: int = 7

    # Final report generation (Ollama server)
    OLLAMA_HOST: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "llama3.2:1b"
    SUMMARIZER_TEMPERATURE: float = 0.3

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
