from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Tuple

from .errors import DuplicateCodeError, NotFoundError
from .schema import validate_product_record
from .types import Product

logger = logging.getLogger(__name__)

__all__ = ["Catalog"]


class Catalog:
    """Read-only lookup of products by code.

    A catalog is built once and shared by every basket; nothing mutates it after
    construction.
    """

    def __init__(self, products: Iterable[Product]):
        by_code = {}
        for product in products:
            if product.code in by_code:
                raise DuplicateCodeError(product.code)
            by_code[product.code] = product
        self._products = MappingProxyType(by_code)
        logger.debug("Catalog built with %d products", len(by_code))

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> "Catalog":
        return cls(validate_product_record(record) for record in records)

    def find(self, code: str) -> Product:
        try:
            return self._products[code]
        except KeyError:
            raise NotFoundError(code) from None

    def codes(self) -> Tuple[str, ...]:
        return tuple(self._products)

    def products(self) -> Tuple[Product, ...]:
        return tuple(self._products.values())

    def __contains__(self, code: object) -> bool:
        return code in self._products

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products.values())

    def __len__(self) -> int:
        return len(self._products)

    def __repr__(self) -> str:
        return f"Catalog(codes={list(self._products)!r})"
