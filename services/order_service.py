"""Grocery order placement against Instacart"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from adapters.instacart_client import InstacartClient
from domain.schemas import CartLineItem, ShoppingListItem

logger = logging.getLogger("dinnerplan.orders")


@dataclass
class CheckoutResult:
    cart_id: str
    checkout: Dict[str, Any]
    line_items: List[CartLineItem] = field(default_factory=list)
    unmatched_items: List[str] = field(default_factory=list)

    @property
    def external_order_id(self) -> Optional[str]:
        order_id = (self.checkout or {}).get("id")
        return str(order_id) if order_id is not None else None


class OrderService:
    """
    Turns a shopping list into a checked-out pickup cart.

    Matching is best-effort: the first search result is taken per item,
    items without a match are left out, and checkout runs even if the cart
    ends up empty. Cart creation and checkout errors propagate.
    """

    def __init__(self, instacart: InstacartClient):
        self.instacart = instacart

    @staticmethod
    def order_quantity(quantity: float) -> int:
        """Whole units to order; fractional and zero amounts become 1"""
        return max(1, math.floor(quantity))

    def build_line_items(self, shopping_list: Iterable[ShoppingListItem]) -> Tuple[List[CartLineItem], List[str]]:
        line_items: List[CartLineItem] = []
        unmatched: List[str] = []

        for item in shopping_list:
            products = self.instacart.search_products(item.name)
            product_id = products[0].get("id") if products else None
            if product_id is None:
                logger.info("No product match for %r", item.name)
                unmatched.append(item.name)
                continue
            line_items.append(
                CartLineItem(product_id=str(product_id), quantity=self.order_quantity(item.quantity))
            )

        return line_items, unmatched

    def checkout_list(self, shopping_list: Iterable[ShoppingListItem], pickup_time: str) -> CheckoutResult:
        cart = self.instacart.create_cart()
        cart_id = str(cart["id"])

        line_items, unmatched = self.build_line_items(shopping_list)
        if line_items:
            self.instacart.add_items(cart_id, [line.model_dump() for line in line_items])
        else:
            logger.warning("Cart %s is empty, checking out anyway", cart_id)

        # A crash between here and the local order write leaves a remote
        # order that only this log line links back to the cart.
        logger.info(
            "Checking out cart %s: %d items, %d unmatched, pickup %s",
            cart_id,
            len(line_items),
            len(unmatched),
            pickup_time,
        )
        checkout = self.instacart.checkout(cart_id, pickup_time)

        return CheckoutResult(
            cart_id=cart_id,
            checkout=checkout or {},
            line_items=line_items,
            unmatched_items=unmatched,
        )
