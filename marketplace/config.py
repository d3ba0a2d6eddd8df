from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # REST data layer
    STORE_BASE_URL: str = "http://127.0.0.1:5000"
    STORE_ADMIN_USERNAME: str | None = None
    STORE_ADMIN_PASSWORD: str | None = None
    STORE_ADMIN_TOKEN: str | None = None
    STORE_SNAPSHOT_PATH: str | None = None

    # HTTP клиенты
    HTTP_TIMEOUT_CONNECT: float = 3.0
    HTTP_TIMEOUT_READ: float = 15.0
    HTTP_TIMEOUT_WRITE: float = 15.0
    HTTP_TIMEOUT_TOTAL: float = 30.0
    HTTP_RETRY_ATTEMPTS: int = 2
    HTTP_RETRY_BACKOFF_INITIAL: float = 0.5
    HTTP_RETRY_BACKOFF_MAX: float = 8.0
    HTTP_RETRY_STATUS_CODES: tuple[int, ...] = (500, 502, 503, 504)
    HTTP_CIRCUIT_BREAKER_MAX_FAILURES: int = 5
    HTTP_CIRCUIT_BREAKER_BASE_DELAY: float = 1.0
    HTTP_CIRCUIT_BREAKER_MAX_DELAY: float = 30.0

    # Логи
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Витрина
    TOP_SELLERS_LIMIT: int = Field(default=5, ge=0)

    # Перераспределение каталога
    DEFAULT_OWNER_ID: int = Field(default=1, ge=1)
    RESERVED_SELLER_COUNT: int = Field(default=2, ge=0)
    ALLOCATION_SEED: int | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("ALLOCATION_SEED", mode="before")
    @classmethod
    def _parse_seed(cls, v):
        if v in (None, ""):
            return None
        return int(v)

    @field_validator(
        "STORE_ADMIN_USERNAME",
        "STORE_ADMIN_PASSWORD",
        "STORE_ADMIN_TOKEN",
        "STORE_SNAPSHOT_PATH",
        mode="before",
    )
    @classmethod
    def _empty_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("STORE_BASE_URL", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


settings = Settings()
