"""HTTP client for the remote product service."""

from __future__ import annotations

from collections.abc import Iterable

import httpx
import structlog

from oms.domain.exceptions import ProductServiceError
from oms.domain.model.product import Product
from oms.domain.model.value_objects import Money
from oms.domain.repository.product_validator import ProductValidator

logger = structlog.get_logger(__name__)

VALIDATE_PATH = "/products/validate"


class HttpProductValidator(ProductValidator):
    """Resolves product ids with ``POST {base_url}/products/validate``.

    The request body is ``{"ids": [...]}`` and the service answers with a
    JSON list of ``{"id", "name", "price"}`` records.  Any failure is
    raised as ProductServiceError carrying the upstream message.

    One instance holds one ``httpx.Client`` and may be shared between
    threads.  No retries are attempted.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def validate(self, product_ids: Iterable[str]) -> list[Product]:
        ids = list(product_ids)
        logger.debug("Validating products", product_ids=ids)

        try:
            response = self._client.post(VALIDATE_PATH, json={"ids": ids})
        except httpx.HTTPError as exc:
            logger.error("Product service unreachable", error=str(exc))
            raise ProductServiceError(
                f"Product service unavailable: {exc}"
            ) from exc

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "Product service rejected ids",
                status_code=response.status_code,
                message=message,
            )
            raise ProductServiceError(message)

        try:
            return [_to_product(record) for record in response.json()]
        except (ValueError, TypeError, KeyError) as exc:
            raise ProductServiceError(
                f"Malformed response from product service: {exc}"
            ) from exc

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpProductValidator:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _to_product(record: dict) -> Product:
    return Product(
        id=str(record["id"]),
        name=record["name"],
        price=Money.of(record["price"]),
    )


def _error_message(response: httpx.Response) -> str:
    """Pull the upstream error message out of an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        message = body["message"]
        if isinstance(message, list):
            return "; ".join(str(m) for m in message)
        return str(message)

    return response.text or f"Product service returned HTTP {response.status_code}"
