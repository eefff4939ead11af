"""Tests for the local JSON product catalog."""

import json

import pytest

from oms.application.create_order import CreateOrderHandler
from oms.application.dto import OrderItemSpec
from oms.domain.exceptions import ProductServiceError, ValidationError
from oms.domain.model.value_objects import Money
from oms.infrastructure.product_service.json_product_catalog import JsonProductCatalog
from tests.fakes import FakeOrderRepository


def test_returns_only_known_products(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps([
        {"id": "p1", "name": "A", "price": "10.00"},
        {"id": "p2", "name": "B", "price": 5},
    ]))

    products = JsonProductCatalog(path).validate(["p2", "missing"])

    assert [(p.id, p.name, p.price) for p in products] == [("p2", "B", Money.of("5"))]


def test_creates_empty_catalog(tmp_path):
    path = tmp_path / "nested" / "products.json"
    assert JsonProductCatalog(path).validate(["p1"]) == []
    assert json.loads(path.read_text()) == []


@pytest.mark.parametrize("content", [
    "not json",
    json.dumps({"p1": {"name": "A", "price": "1"}}),
    json.dumps([{"id": "p1", "name": "A"}]),
    json.dumps([{"id": "p1", "price": "1"}]),
    json.dumps([{"id": "p1", "name": "A", "price": "-1"}]),
    json.dumps([{"id": "p1", "name": "A", "price": "cheap"}]),
    json.dumps(["p1"]),
])
def test_malformed_catalog_raises_product_service_error(tmp_path, content):
    path = tmp_path / "products.json"
    path.write_text(content)

    with pytest.raises(ProductServiceError, match="Malformed product catalog products.json"):
        JsonProductCatalog(path).validate(["p1"])


def test_malformed_catalog_fails_order_creation_as_validation_error(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps([{"id": "p1", "name": "A"}]))
    order_repo = FakeOrderRepository()
    handler = CreateOrderHandler(order_repo, JsonProductCatalog(path))

    with pytest.raises(ValidationError, match="Malformed product catalog") as excinfo:
        handler.handle([OrderItemSpec("p1", 1)])

    assert excinfo.value.status_code == 400
    assert order_repo.count() == 0
