# app/core/config.py

from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, (list, str)):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "precios-chat-bot"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    SENTRY_DSN: AnyUrl | None = None
    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    # ─────────────────── credenciales & endpoints ────────────────────
    # Sin clave se envía cadena vacía: el servicio remoto es quien rechaza.
    MISTRAL_API_KEY: str = ""
    LLM_BASE_URL: str = "https://api.mistral.ai/v1"
    LLM_MODEL: str = "mistral-large-latest"

    LOSPRECIOS_API_KEY: str = ""
    PRICE_API_URL: str = "https://losprecios.co/buscar/resultado"

    # sesiones en memoria; al superar el límite se descarta la más antigua
    MAX_SESSIONS: int = 1000

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]


settings = Settings()  # type: ignore
