"""Este módulo contiene la configuración de la aplicación, leída del entorno o de un fichero .env."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from imgtransform.schemas import HeaderPolicy

GET_RESPONSE_TEXT: str = "you need to post data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="IMGTRANSFORM_", env_file=".env")

    host: str = Field(default="127.0.0.1", description="Interface to bind to")
    port: int = Field(default=3000, ge=1, le=65535, description="Port to listen on")
    log_level: str = Field(default="INFO", description="Logging level")
    header_policy: HeaderPolicy = Field(
        default=HeaderPolicy.LENIENT,
        description="lenient resolves malformed headers to defaults, strict answers 400",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("header_policy", mode="before")
    @classmethod
    def lower_header_policy(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
