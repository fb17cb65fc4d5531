from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field(..., alias="DATABASE_URL")

    jwt_secret_key: str = Field(..., alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    # Admin tokens are valid for 24 hours; there is no refresh flow.
    access_token_expire_minutes: int = Field(1440, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Single studio admin. ADMIN_PASSWORD may be plain text or a bcrypt hash ($2b$...).
    admin_username: Optional[str] = Field(None, alias="ADMIN_USERNAME")
    admin_password: Optional[str] = Field(None, alias="ADMIN_PASSWORD")

    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    auto_create_schema: bool = Field(True, alias="AUTO_CREATE_SCHEMA")
    cors_origins: str = Field("*", alias="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def cors_origin_list(self) -> list:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
