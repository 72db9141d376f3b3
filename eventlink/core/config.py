"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY, Firebase credentials
when the Firestore backend is selected) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required_and_store (secret_key, and Firebase credentials
    when store_backend is 'firestore').
    """

    # App
    app_name: str = "eventlink"
    app_version: str = "1.0.0"
    debug: bool = False

    # Document store: "firestore" (Firestore REST) or "memory" (single process, dev/tests)
    store_backend: str = "memory"
    store_timeout_seconds: float = 15.0
    # Conflicting transactions retry until the deadline; an attempt cap is optional.
    store_transaction_deadline_seconds: float = 10.0
    store_transaction_max_attempts: int | None = None

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None

    # Registration policy
    registration_block_closed: bool = True
    registration_block_completed: bool = True
    attendee_fanout_concurrency: int = 10

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8081"

    # Request / middleware
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required_and_store(self) -> "Settings":
        """Validate required env and store backend.

        - Firestore: FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH required.
        - Memory: no credentials; data lives for the lifetime of the process.
        """
        if self.store_backend == "firestore":
            has_key = (
                self.firebase_service_account_key
                and self.firebase_service_account_key.get_secret_value()
            )
            if not has_key and not self.firebase_service_account_path:
                raise ValueError(
                    "When store_backend is 'firestore', set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string) "
                    "or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
                )
        elif self.store_backend != "memory":
            raise ValueError(
                f"store_backend must be 'firestore' or 'memory', got: {self.store_backend!r}"
            )
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.store_transaction_deadline_seconds <= 0:
            raise ValueError("STORE_TRANSACTION_DEADLINE_SECONDS must be positive")
        if (
            self.store_transaction_max_attempts is not None
            and self.store_transaction_max_attempts < 1
        ):
            raise ValueError("STORE_TRANSACTION_MAX_ATTEMPTS must be at least 1")
        if self.attendee_fanout_concurrency < 1:
            raise ValueError("ATTENDEE_FANOUT_CONCURRENCY must be at least 1")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
