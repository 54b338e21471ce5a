"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="Darents", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # MongoDB settings
    mongo_uri: str = Field(
        default="mongodb://localhost:27017", description="MongoDB connection URI"
    )
    mongo_db_name: str = Field(default="darents", description="MongoDB database name")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database connection retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB connection attempts"
    )
    in_query_chunk_size: int = Field(
        default=30,
        ge=1,
        description="Maximum number of ids sent in a single $in query",
    )

    # Authentication
    jwt_secret_key: str = Field(
        default="change-me-in-production", description="Secret used to sign tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="Token signing algorithm")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7, ge=1, description="Access token lifetime in minutes"
    )
    password_min_length: int = Field(
        default=6, ge=1, description="Minimum password length for sign up"
    )
    google_client_ids: list[str] = Field(
        default_factory=list,
        description="OAuth client ids accepted as Google ID token audience",
    )
    google_issuers: list[str] = Field(
        default=["accounts.google.com", "https://accounts.google.com"],
        description="Accepted Google ID token issuers",
    )
    google_jwks_url: str = Field(
        default="https://www.googleapis.com/oauth2/v3/certs",
        description="Google signing keys endpoint",
    )
    apple_client_id: str = Field(
        default="com.darents.app",
        description="Apple services id / bundle id used as token audience",
    )
    apple_issuer: str = Field(
        default="https://appleid.apple.com", description="Apple identity token issuer"
    )
    apple_jwks_url: str = Field(
        default="https://appleid.apple.com/auth/keys",
        description="Apple signing keys endpoint",
    )
    oauth_http_timeout_sec: float = Field(
        default=10.0, gt=0, description="Timeout for identity provider requests"
    )

    # Photo storage
    photo_max_bytes: int = Field(
        default=10 * 1024 * 1024, ge=1, description="Maximum accepted photo size"
    )
    photo_allowed_content_types: list[str] = Field(
        default=["image/jpeg", "image/png", "image/heic"],
        description="Accepted photo content types",
    )
    photo_url_prefix: str = Field(
        default="/photos", description="URL prefix under which photos are served"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(default="Darents API", description="API documentation title")
    api_description: str = Field(
        default="Pets, darents, shared households and activity logs",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT


# Global settings instance
settings = Settings()

MONGO_URI = settings.mongo_uri
MONGO_DB = settings.mongo_db_name
