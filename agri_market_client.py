"""AgriMarket API client.

A thin wrapper around the marketplace's HTTP API for scripts, bots or
other services.  It uses the ``requests`` library internally and
returns ``(data, error)`` tuples instead of raising: on success
``error`` is ``None``; on failure ``data`` is ``None`` (or an empty list
for listings) and ``error`` is a dictionary with ``status_code`` and
``message`` keys.

The client exposes high‑level methods for the marketplace flows:

* :meth:`login` – obtain and remember an access token.
* :meth:`list_products`, :meth:`get_product`, :meth:`create_product`.
* :meth:`place_bid`, :meth:`update_bid_status`.
* :meth:`create_transport_request`, :meth:`available_transport_requests`,
  :meth:`update_transport_status`.
* :meth:`send_message`, :meth:`conversation`, :meth:`unread_messages`,
  :meth:`mark_message_read`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class AgriMarketAPI:
    """Client for the marketplace HTTP API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        api_prefix: str = "/api",
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
            token: Optional access token.  If set, an ``Authorization``
                header ``Bearer <token>`` is sent with every request.
            session: Optional requests session.  If not supplied a
                session is created automatically.
            api_prefix: Path prefix the API is mounted under.
            timeout: Per‑request timeout in seconds.
        """
        prefix = api_prefix.strip("/")
        self.base_url = base_url.rstrip("/") + (f"/{prefix}" if prefix else "")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``).
            path: Path relative to the API prefix (e.g. ``/products``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str, params: Dict[str, Any] | None = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", path, params=params)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def login(self, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Log in and keep the returned token for subsequent requests."""
        data, error = self._request("POST", "/login", json_body={"username": username, "password": password})
        if error:
            return None, error
        self.token = data.get("access_token")
        return data.get("user"), None

    # ------------------------------------------------------------------
    # Products and bids
    # ------------------------------------------------------------------
    def list_products(self, *, category: Optional[str] = None, status: Optional[str] = None):
        params = {k: v for k, v in {"category": category, "status": status}.items() if v is not None}
        return self._list("/products", params=params or None)

    def get_product(self, product_id: int):
        return self._request("GET", f"/products/{product_id}")

    def create_product(self, payload: Dict[str, Any]):
        return self._request("POST", "/products", json_body=payload)

    def place_bid(self, product_id: int, amount: float, quantity: float, message: Optional[str] = None):
        body = {"product_id": product_id, "amount": amount, "quantity": quantity}
        if message:
            body["message"] = message
        return self._request("POST", "/bids", json_body=body)

    def update_bid_status(self, bid_id: int, status: str):
        return self._request("PATCH", f"/bids/{bid_id}/status", json_body={"status": status})

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def create_transport_request(self, payload: Dict[str, Any]):
        return self._request("POST", "/transport", json_body=payload)

    def available_transport_requests(self):
        return self._list("/transport/available")

    def update_transport_status(self, request_id: int, status: str):
        return self._request("PATCH", f"/transport/{request_id}/status", json_body={"status": status})

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    def send_message(self, receiver_id: int, content: str):
        return self._request("POST", "/messages", json_body={"receiver_id": receiver_id, "content": content})

    def conversation(self, user_id: int):
        return self._list(f"/messages/{user_id}")

    def unread_messages(self):
        return self._list("/messages/unread")

    def mark_message_read(self, message_id: int):
        return self._request("PATCH", f"/messages/{message_id}/read")
