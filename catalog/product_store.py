"""
Product store — the authoritative in-memory product collection.

Applies create / update / delete and notifies a single observer after each
successful mutation.  Missing ids on update / delete are silent no-ops;
malformed records are rejected upstream by the form validator, never here.

Public API:
    ProductStore(products, clock)
        .create(candidate) → Product
        .update(product)   → bool
        .delete(product_id) → bool
        .get(product_id)   → Product | None
        .list()            → tuple[Product, ...]
        .set_observer(callback)
"""

import logging
import time
from typing import Callable, Iterable

from catalog.models import Product

logger = logging.getLogger(__name__)

Observer = Callable[[tuple[Product, ...]], None]


def _epoch_millis() -> int:
    return int(time.time() * 1000)


class ProductStore:
    """
    In-memory product collection owned by one UI session.

    Ids for new products are millisecond timestamps rendered as strings.
    Each minted id is strictly greater than the previous one and never
    collides with an id already in the store.
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        clock: Callable[[], int] = _epoch_millis,
    ) -> None:
        self._products: tuple[Product, ...] = tuple(products)
        self._clock = clock
        self._last_minted: int = 0
        self._observer: Observer | None = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self) -> tuple[Product, ...]:
        """Snapshot of the collection; Products are frozen, so read-only."""
        return self._products

    def get(self, product_id: str) -> Product | None:
        for product in self._products:
            if product.product_id == product_id:
                return product
        return None

    def __len__(self) -> int:
        return len(self._products)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, candidate: Product) -> Product:
        """
        Store *candidate* under a freshly minted id and return the result.

        Any id already on the candidate is discarded.
        """
        product = candidate.with_id(self._mint_id())
        self._commit(self._products + (product,))
        logger.info(f"Created product {product.product_id} ('{product.item}')")
        return product

    def update(self, product: Product) -> bool:
        """
        Replace the stored product with the same id, keeping its position.

        Returns:
            True if a product was replaced, False if the id is unknown.
        """
        for position, existing in enumerate(self._products):
            if existing.product_id == product.product_id:
                updated = list(self._products)
                updated[position] = product
                self._commit(tuple(updated))
                logger.info(f"Updated product {product.product_id}")
                return True

        logger.debug(f"Update skipped: no product with id '{product.product_id}'")
        return False

    def delete(self, product_id: str) -> bool:
        """
        Remove the product with *product_id*.

        Returns:
            True if a product was removed, False if the id is unknown.
        """
        remaining = tuple(
            product for product in self._products
            if product.product_id != product_id
        )
        if len(remaining) == len(self._products):
            logger.debug(f"Delete skipped: no product with id '{product_id}'")
            return False

        self._commit(remaining)
        logger.info(f"Deleted product {product_id}")
        return True

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def set_observer(self, observer: Observer | None) -> None:
        """Register the single change observer, replacing any previous one."""
        self._observer = observer

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _commit(self, products: tuple[Product, ...]) -> None:
        # Swap in the finished tuple first; the observer only ever sees
        # a complete collection.
        self._products = products
        if self._observer is not None:
            self._observer(self._products)

    def _mint_id(self) -> str:
        existing_ids = {product.product_id for product in self._products}
        candidate = max(self._clock(), self._last_minted + 1)
        while str(candidate) in existing_ids:
            candidate += 1
        self._last_minted = candidate
        return str(candidate)
