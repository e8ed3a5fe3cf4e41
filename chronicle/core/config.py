from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow"  # Allow extra fields from environment
    )
    
    # Application
    app_name: str = "Chronicle"
    app_version: str = "1.0.0"
    environment: str = "development"  # development, staging, production
    debug: bool = True
    
    # Logging
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: str = "/tmp/chronicle.log"
    
    # LLM Configuration
    llm_provider: str = "openai"  # openai, google
    llm_model: str = "gpt-4o"
    llm_temperature: float = 0.7
    max_tokens: int = 4000
    # None leaves the timeout to the client library / transport
    llm_timeout_seconds: Optional[float] = None
    
    # API Keys (a missing key switches generation to templated lessons)
    openai_api_key: Optional[str] = None
    google_api_key: Optional[str] = None
    
    # Standard validation
    min_standard_length: int = 10
    max_standard_length: int = 5000
    
    # Pipeline limits
    max_search_terms: int = 15
    max_suggested_activities: int = 5
    
    # CORS
    allowed_origins: list = ["*"]
    
    # Server
    host: str = "0.0.0.0"
    port: int = 8000


# Create single instance to be imported throughout the app
settings = Settings()
