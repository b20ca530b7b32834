"""Pydantic BaseSettings — network, credentials and logging."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from config.constants import MAINNET_API_URL


class Settings(BaseSettings):
    """Central configuration loaded from env / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── Application ─────────────────────────────────────────────
    APP_ENV: Literal["dev", "testnet", "prod"] = "dev"
    APP_NAME: str = "hl-exchange"
    LOG_LEVEL: str = "INFO"

    # ── Network / API ───────────────────────────────────────────
    # When unset, the network is inferred from HL_API_URL.
    HL_NETWORK: Optional[Literal["mainnet", "testnet", "local"]] = None
    HL_API_URL: str = MAINNET_API_URL
    HL_HTTP_TIMEOUT_SECONDS: float = 10.0

    # ── Credentials (never commit real values) ──────────────────
    HL_PRIVATE_KEY: str = ""
    HL_VAULT_ADDRESS: str = ""


settings = Settings()
