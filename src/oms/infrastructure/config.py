"""Service configuration loaded from environment variables.

Values are validated once at startup so a bad setting fails fast
instead of surfacing halfway through a request.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_PRODUCT_SERVICE_TIMEOUT = 5.0

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_LOG_FORMATS = {"console", "json"}


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    product_service_url: str | None = None
    product_service_timeout: float = DEFAULT_PRODUCT_SERVICE_TIMEOUT
    validate_products: bool = True
    log_level: str = "WARNING"
    log_format: str = "console"

    @property
    def orders_file(self) -> Path:
        return self.data_dir / "orders.json"

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        data_dir = env.get("OMS_DATA_DIR")
        url = (env.get("OMS_PRODUCT_SERVICE_URL") or "").strip() or None

        return Settings(
            data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
            product_service_url=url.rstrip("/") if url else None,
            product_service_timeout=_parse_timeout(
                env.get("OMS_PRODUCT_SERVICE_TIMEOUT")
            ),
            validate_products=_parse_bool(
                "OMS_VALIDATE_PRODUCTS", env.get("OMS_VALIDATE_PRODUCTS"), True
            ),
            log_level=_parse_log_level(env.get("OMS_LOG_LEVEL")),
            log_format=_parse_log_format(env.get("OMS_LOG_FORMAT")),
        )


# --- Parsing helpers ----------------------------------------------------------


def _parse_bool(name: str, raw: str | None, default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def _parse_timeout(raw: str | None) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_PRODUCT_SERVICE_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(
            f"OMS_PRODUCT_SERVICE_TIMEOUT must be a number, got {raw!r}"
        ) from None
    if timeout <= 0:
        raise ConfigurationError("OMS_PRODUCT_SERVICE_TIMEOUT must be positive")
    return timeout


def _parse_log_level(raw: str | None) -> str:
    if raw is None or not raw.strip():
        return "WARNING"
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"OMS_LOG_LEVEL is not a logging level: {raw!r}")
    return level


def _parse_log_format(raw: str | None) -> str:
    if raw is None or not raw.strip():
        return "console"
    fmt = raw.strip().lower()
    if fmt not in _LOG_FORMATS:
        raise ConfigurationError(
            f"OMS_LOG_FORMAT must be one of {sorted(_LOG_FORMATS)}, got {raw!r}"
        )
    return fmt
