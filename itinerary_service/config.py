"""Configuration settings using Pydantic"""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Supabase Configuration
    # Anon key is used for public status reads, service key for job writes
    supabase_url: str = Field(..., alias="SUPABASE_URL")
    supabase_anon_key: str = Field(..., alias="SUPABASE_ANON_KEY")
    supabase_service_key: str = Field(..., alias="SUPABASE_SERVICE_KEY")
    itineraries_table: str = Field(default="itineraries", alias="ITINERARIES_TABLE")

    # Completion API
    completion_api_key: str = Field(..., alias="OPENAI_API_KEY")
    completion_api_url: str = Field(
        default="https://api.openai.com/v1/chat/completions",
        alias="COMPLETION_API_URL"
    )
    model_name: str = Field(default="gpt-4o-mini", alias="MODEL_NAME")
    model_temperature: float = Field(default=0.3, alias="MODEL_TEMPERATURE")
    max_output_tokens: int = Field(default=2000, alias="MAX_OUTPUT_TOKENS")
    completion_timeout_seconds: float = Field(default=30.0, alias="COMPLETION_TIMEOUT_SECONDS")

    # Application Settings
    env: str = Field(default="development", alias="ENV")
    log_level: str = Field(default="info", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")

    # Request Validation
    min_destination_length: int = 3
    min_trip_days: int = 1
    max_trip_days: int = 14

    # Security Settings
    # 10 requests per minute per client (process-local, single instance only)
    rate_limit_requests: int = Field(default=10, alias="RATE_LIMIT_REQUESTS")
    rate_limit_window_seconds: float = Field(default=60.0, alias="RATE_LIMIT_WINDOW_SECONDS")
    max_request_bytes: int = Field(default=1024, alias="MAX_REQUEST_BYTES")

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
