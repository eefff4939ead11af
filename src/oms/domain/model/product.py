"""Product record as reported by the product service.

Products are owned by an external catalog. This service only reads them
to snapshot prices and names at order-creation time.
"""

from __future__ import annotations

from dataclasses import dataclass

from oms.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:

    id: str
    name: str
    price: Money
