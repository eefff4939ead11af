"""End-to-end tests of the click commands against a temporary data directory."""

import json

import pytest
from click.testing import CliRunner

from oms.infrastructure.cli.main import cli


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    (tmp_path / "products.json").write_text(json.dumps([
        {"id": "p1", "name": "A", "price": "10"},
        {"id": "p2", "name": "B", "price": "5"},
    ]))
    monkeypatch.setenv("OMS_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("OMS_PRODUCT_SERVICE_URL", raising=False)
    monkeypatch.delenv("OMS_VALIDATE_PRODUCTS", raising=False)
    monkeypatch.setenv("OMS_LOG_LEVEL", "CRITICAL")
    return tmp_path


def _run(*args: str):
    return CliRunner().invoke(cli, list(args))


def _create(items: str) -> dict:
    result = _run("order", "create", "--items", items, "--json")
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestOrderCreate:

    def test_creates_order_from_catalog_prices(self, data_dir):
        order = _create("p1:2,p2:1")
        assert order["total_amount"] == "25.00"
        assert order["total_items"] == 3
        assert [i["name"] for i in order["items"]] == ["A", "B"]

    def test_table_output(self, data_dir):
        result = _run("order", "create", "--items", "p1:1")
        assert result.exit_code == 0, result.output
        assert "created" in result.output
        assert "10.00" in result.output

    def test_unknown_product_fails_with_400(self, data_dir):
        result = _run("order", "create", "--items", "p1:1,zzz:1")
        assert result.exit_code == 1
        assert "[400] Product not found: 'zzz'" in result.output

        listing = json.loads(_run("order", "list", "--json").output)
        assert listing["meta"]["total"] == 0

    def test_bad_item_format(self, data_dir):
        result = _run("order", "create", "--items", "p1")
        assert result.exit_code == 2
        assert "Expected 'ProductId:Quantity[:Price]'" in result.output

    def test_caller_prices_when_validation_disabled(self, data_dir, monkeypatch):
        monkeypatch.setenv("OMS_VALIDATE_PRODUCTS", "false")
        order = _create("x1:2:1.25,x2:1:3")
        assert order["total_amount"] == "5.50"


class TestOrderQueries:

    def test_list_paginates(self, data_dir):
        for _ in range(5):
            _create("p2:1")

        page = json.loads(_run("order", "list", "--page", "3", "--limit", "2", "--json").output)

        assert len(page["data"]) == 1
        assert page["meta"] == {"total": 5, "page": 3, "last_page": 3}

    def test_list_table_when_empty(self, data_dir):
        result = _run("order", "list")
        assert result.exit_code == 0
        assert "No orders found." in result.output

    def test_show_and_not_found(self, data_dir):
        order = _create("p1:1")

        shown = json.loads(_run("order", "show", "--id", order["id"], "--json").output)
        assert shown["id"] == order["id"]

        missing = _run("order", "show", "--id", "nope")
        assert missing.exit_code == 1
        assert "[404] Order with id nope not found" in missing.output


class TestOrderStatus:

    def test_change_status_is_persisted(self, data_dir):
        order = _create("p1:1")

        result = _run("order", "status", "--id", order["id"], "--status", "paid")
        assert result.exit_code == 0, result.output
        assert "is now PAID" in result.output

        shown = json.loads(_run("order", "show", "--id", order["id"], "--json").output)
        assert shown["status"] == "PAID"
        assert shown["paid"] is True

        paid = json.loads(_run("order", "list", "--status", "PAID", "--json").output)
        assert paid["meta"]["total"] == 1

    def test_unknown_order(self, data_dir):
        result = _run("order", "status", "--id", "nope", "--status", "PAID")
        assert result.exit_code == 1
        assert "[404]" in result.output


def test_bad_configuration_is_reported(data_dir, monkeypatch):
    monkeypatch.setenv("OMS_PRODUCT_SERVICE_TIMEOUT", "-1")
    result = _run("order", "list")
    assert result.exit_code == 1
    assert "must be positive" in result.output
