import os

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]

# Fee recipient the reference UI registers with the Djed contract
DEFAULT_UI_ADDRESS = "0x0232556C83791b8291E9b23BfEa7d67405Bd9839"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STABLEPAY_",
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def model_post_init(self, __context: Any) -> None:
        """Pick up the unprefixed log level used by deployment scripts."""

        super().model_post_init(__context)

        if "log_level" not in self.model_fields_set:
            fallback = os.getenv("LOG_LEVEL")
            if fallback:
                object.__setattr__(self, "log_level", fallback)

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # RPC
    rpc_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied by the HTTP client to every JSON-RPC request",
    )

    # Djed purchase defaults
    ui_address: str = Field(
        default=DEFAULT_UI_ADDRESS,
        description="Fee recipient passed to buyStableCoins",
        validation_alias=AliasChoices("ui_address", "STABLEPAY_UI_ADDRESS", "STABLEPAY_FEE_RECIPIENT"),
    )
    ui_fee: int = Field(
        default=0,
        description="UI fee passed to buyStableCoins (1e24-scaled fraction)",
    )

    # Protocol dispatch
    strict_protocol_tags: bool = Field(
        default=True,
        description="Reject unknown protocol tags instead of falling back to djed",
    )


# Global settings instance
settings = Settings()
