"""
Configuration settings for the Cosmos validators exporter.

Uses Pydantic Settings to load environment variables for the node endpoint,
query sizing, denomination display, constant labels, HTTP listener and
logging. Values are static for the lifetime of the process.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LABEL_NAME = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")


class Settings(BaseSettings):
    # Upstream node
    node_endpoint: str = Field("http://localhost:1317", alias="NODE_ENDPOINT")
    query_limit: int = Field(1000, gt=0, alias="QUERY_LIMIT")
    request_timeout_seconds: float = Field(10.0, gt=0, alias="REQUEST_TIMEOUT_SECONDS")

    # Chain display
    denom: str = Field("uatom", alias="DENOM")
    denom_coefficient: float = Field(1.0, gt=0, alias="DENOM_COEFFICIENT")
    bech32_prefix: str = Field("cosmos", alias="BECH32_PREFIX")
    const_labels: Dict[str, str] = Field(default_factory=dict, alias="CONST_LABELS")

    # HTTP listener
    listen_host: str = Field("0.0.0.0", alias="LISTEN_HOST")
    listen_port: int = Field(9300, alias="LISTEN_PORT")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="JSON_LOGS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("const_labels")
    @classmethod
    def label_names_are_valid(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Constant label names must be valid Prometheus label names."""
        for name in v:
            if not _LABEL_NAME.fullmatch(name) or name.startswith("__"):
                raise ValueError(f"invalid label name {name!r}")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
