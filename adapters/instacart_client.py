"""Instacart Connect client for pickup orders at one retailer location."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from adapters.http_client import JsonApiClient

logger = logging.getLogger("dinnerplan.instacart")


class InstacartClient(JsonApiClient):
    """Cart, search and checkout calls scoped to a retailer and store."""

    def __init__(
        self,
        access_token: Optional[str],
        retailer_id: str,
        store_id: str,
        base_url: str = "https://connect.instacart.com/v2",
        request_timeout_seconds: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(base_url, access_token, request_timeout_seconds, session)
        self.retailer_id = retailer_id
        self.store_id = store_id

    def search_products(self, query: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Search the store's catalog.

        Returns an empty list on any remote failure so one bad search does
        not abort an order.
        """
        try:
            payload = self._get(
                f"/retailers/{self.retailer_id}/locations/{self.store_id}/products/search",
                params={"q": query, "limit": limit},
            )
        except requests.RequestException as exc:
            logger.warning("Instacart search failed for %r: %s", query, exc)
            return []
        if not isinstance(payload, dict):
            logger.warning("Unexpected Instacart search response for %r: %r", query, payload)
            return []
        return payload.get("products") or []

    def create_cart(self) -> Dict[str, Any]:
        return self._post(
            "/carts", {"retailer_id": self.retailer_id, "location_id": self.store_id}
        )

    def add_items(self, cart_id: str, items: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self._post(f"/carts/{cart_id}/items", {"items": items})

    def checkout(self, cart_id: str, pickup_time: str) -> Dict[str, Any]:
        return self._post(
            f"/carts/{cart_id}/checkout",
            {"service_option": {"type": "pickup", "requested_start_at": pickup_time}},
        )

    def get_store_availability(self) -> Dict[str, Any]:
        return self._get(
            f"/retailers/{self.retailer_id}/locations/{self.store_id}/availability"
        )
