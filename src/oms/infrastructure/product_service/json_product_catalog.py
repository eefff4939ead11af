"""JSON-file-backed ProductValidator for running without a product service."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from oms.domain.exceptions import ProductServiceError, ValidationError
from oms.domain.model.product import Product
from oms.domain.model.value_objects import Money
from oms.domain.repository.product_validator import ProductValidator


class JsonProductCatalog(ProductValidator):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductValidator interface -------------------------------------------

    def validate(self, product_ids: Iterable[str]) -> list[Product]:
        products = self._load()
        return [products[pid] for pid in product_ids if pid in products]

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise TypeError("top level must be a list of products")
            return {
                str(item["id"]): Product(
                    id=str(item["id"]),
                    name=item["name"],
                    price=Money.of(item["price"]),
                )
                for item in raw
            }
        except (ValueError, TypeError, KeyError, ValidationError) as exc:
            raise ProductServiceError(
                f"Malformed product catalog {self._file_path.name}: {exc}"
            ) from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
