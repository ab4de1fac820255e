from functools import lru_cache
import json
import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class SentryConfig(BaseModel):
    SENTRY_DSN: str | None = None
    SENTRY_ENV: str = "development"
    SENTRY_ENABLED: bool = False

    model_config = ConfigDict(extra="ignore")


class JWTConfig(BaseModel):
    JWT_SECRET_KEY: str = Field(min_length=1)
    ACCESS_TOKEN_EXPIRE_SECONDS: int = Field(3600, gt=0)

    model_config = ConfigDict(extra="ignore")


class AppConfig(BaseModel):
    VERSION: str = "0.1.0"
    DEBUG: bool = False
    TESTING: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_LEVEL_FILE: str = "WARNING"
    LOG_TO_FILE: bool = True
    LOG_DIR: str = "logs"

    CORS_ALLOWED_ORIGINS: list[str] = Field(["*"])
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOWED_METHODS: list[str] = Field(["*"])
    CORS_ALLOWED_HEADERS: list[str] = Field(["*"])
    CORS_EXPOSE_HEADERS: list[str] = Field(["*"])

    PROJECT_NAME: str = "session-tokens"

    model_config = ConfigDict(extra="ignore")

    @field_validator(
        "CORS_ALLOWED_ORIGINS",
        "CORS_ALLOWED_METHODS",
        "CORS_ALLOWED_HEADERS",
        "CORS_EXPOSE_HEADERS",
        mode="before",
    )
    @classmethod
    def parse_cors_list(cls, v: Any) -> list[str]:
        if isinstance(v, list):
            return v
        if isinstance(v, str) and v.strip().startswith("[") and v.strip().endswith("]"):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(item) for item in parsed]
            except json.JSONDecodeError:
                pass
        sep = "," if "," in v else ";"
        return [item.strip() for item in v.split(sep) if item.strip()]


class Config(BaseModel):
    app: AppConfig
    jwt: JWTConfig
    sentry: SentryConfig

    model_config = ConfigDict(extra="ignore")


def load_env(env_filename: str | None = None) -> dict[str, Any]:
    """
    Merge values from the env file with the process environment.

    Process environment wins over the file. The file is looked up in the
    project root so the result does not depend on the working directory.
    """
    if env_filename is None:
        env_filename = ".env.test" if os.getenv("TESTING") == "true" else ".env"
    env_path = PROJECT_ROOT / env_filename
    if not env_path.exists():
        logger.debug("Env file %s not found, using process environment only", env_path)
    env_file_values = dotenv_values(env_path)
    return {
        k: v
        for k, v in {**env_file_values, **dict(os.environ)}.items()
        if v is not None
    }


@lru_cache
def get_settings() -> Config:
    """
    Cached settings factory. Override in tests via monkeypatching or dependency overrides.
    """
    merged_env = load_env()

    return Config(
        app=AppConfig(**merged_env),
        jwt=JWTConfig(**merged_env),
        sentry=SentryConfig(**merged_env),
    )


config = get_settings()
