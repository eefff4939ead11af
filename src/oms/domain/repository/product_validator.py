"""Port for the external product service.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (HTTP, local JSON catalog)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from oms.domain.model.product import Product


class ProductValidator(ABC):

    @abstractmethod
    def validate(self, product_ids: Iterable[str]) -> list[Product]:
        """Resolve product ids to authoritative product records.

        Returns the records for the ids that exist; ids that do not exist
        may simply be absent from the result.  Raises
        ``ProductServiceError`` when the lookup itself fails or the
        service rejects the ids.
        """
