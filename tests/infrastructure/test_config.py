"""Tests for environment-based settings."""

from pathlib import Path

import pytest

from oms.infrastructure.config import (
    DEFAULT_DATA_DIR,
    ConfigurationError,
    Settings,
)


def test_defaults():
    settings = Settings.from_env({})
    assert settings.data_dir == DEFAULT_DATA_DIR
    assert settings.product_service_url is None
    assert settings.product_service_timeout == 5.0
    assert settings.validate_products is True
    assert settings.log_level == "WARNING"
    assert settings.log_format == "console"


def test_reads_all_variables(tmp_path):
    settings = Settings.from_env({
        "OMS_DATA_DIR": str(tmp_path),
        "OMS_PRODUCT_SERVICE_URL": "http://products:3001/",
        "OMS_PRODUCT_SERVICE_TIMEOUT": "2.5",
        "OMS_VALIDATE_PRODUCTS": "no",
        "OMS_LOG_LEVEL": "debug",
        "OMS_LOG_FORMAT": "JSON",
    })
    assert settings.orders_file == Path(tmp_path) / "orders.json"
    assert settings.products_file == Path(tmp_path) / "products.json"
    assert settings.product_service_url == "http://products:3001"
    assert settings.product_service_timeout == 2.5
    assert settings.validate_products is False
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"


@pytest.mark.parametrize("env,match", [
    ({"OMS_PRODUCT_SERVICE_TIMEOUT": "soon"}, "must be a number"),
    ({"OMS_PRODUCT_SERVICE_TIMEOUT": "0"}, "must be positive"),
    ({"OMS_VALIDATE_PRODUCTS": "maybe"}, "must be a boolean"),
    ({"OMS_LOG_LEVEL": "LOUD"}, "not a logging level"),
    ({"OMS_LOG_FORMAT": "xml"}, "OMS_LOG_FORMAT must be one of"),
])
def test_invalid_values_rejected(env, match):
    with pytest.raises(ConfigurationError, match=match):
        Settings.from_env(env)
