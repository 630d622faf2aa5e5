"""Razor Tracker API client.

A thin wrapper around the REST API served by ``razor_tracker_api``.  It
uses the ``requests`` library and unwraps the service's response
envelope (``{success, data, message, error}``) so callers deal only
with the payload.

Every public method returns a tuple ``(data, error)``:

* on success ``data`` is the envelope's ``data`` (``None`` for deletes)
  and ``error`` is ``None``;
* on failure ``data`` is ``None`` and ``error`` is a dictionary with
  keys ``status_code`` and ``message``.

Network errors are reported the same way instead of being raised, so a
script can keep going when the service is down.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests


logger = logging.getLogger(__name__)


Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class RazorTrackerClient:
    """Client for the razor tracker HTTP API.

    Args:
        base_url: Service root, e.g. ``http://localhost:8080``.  The
            ``/api/v1`` prefix is added by the client.
        session: Optional requests session.  If not supplied a session
            is created automatically.
        timeout: Per‑request timeout in seconds.
    """

    API_PREFIX = "/api/v1"

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        json_body: Any | None = None,
        prefixed: bool = True,
    ) -> Result:
        """Perform an HTTP request and unwrap the envelope.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path below the API prefix (e.g. ``/razors``).
            params: Query parameters.
            json_body: JSON body for POST/PUT.
            prefixed: Whether to prepend ``/api/v1`` to ``path``.
        """
        url = f"{self.base_url}{self.API_PREFIX if prefixed else ''}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json() if response.content else {}
            return body.get("data"), None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _page_params(page: int, page_size: int) -> Dict[str, int]:
        params: Dict[str, int] = {}
        if page:
            params["page"] = page
        if page_size:
            params["page_size"] = page_size
        return params

    # ------------------------------------------------------------------
    # Razors
    # ------------------------------------------------------------------
    def list_razors(self, page: int = 0, page_size: int = 0) -> Result:
        """Return one page (``items``, ``total``, ...) of razors."""
        return self._request("GET", "/razors", params=self._page_params(page, page_size))

    def get_razor(self, razor_id: int) -> Result:
        return self._request("GET", f"/razors/{razor_id}")

    def create_razor(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/razors", json_body=payload)

    def update_razor(self, razor_id: int, payload: Dict[str, Any]) -> Result:
        return self._request("PUT", f"/razors/{razor_id}", json_body=payload)

    def delete_razor(self, razor_id: int) -> Result:
        return self._request("DELETE", f"/razors/{razor_id}")

    # ------------------------------------------------------------------
    # Blades
    # ------------------------------------------------------------------
    def list_blades(self, page: int = 0, page_size: int = 0) -> Result:
        return self._request("GET", "/blades", params=self._page_params(page, page_size))

    def get_blade(self, blade_id: int) -> Result:
        return self._request("GET", f"/blades/{blade_id}")

    def create_blade(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/blades", json_body=payload)

    def update_blade(self, blade_id: int, payload: Dict[str, Any]) -> Result:
        return self._request("PUT", f"/blades/{blade_id}", json_body=payload)

    def delete_blade(self, blade_id: int) -> Result:
        return self._request("DELETE", f"/blades/{blade_id}")

    # ------------------------------------------------------------------
    # Usage records
    # ------------------------------------------------------------------
    def list_usage_records(self, page: int = 0, page_size: int = 0) -> Result:
        return self._request(
            "GET", "/usage-records", params=self._page_params(page, page_size)
        )

    def get_usage_record(self, record_id: int) -> Result:
        return self._request("GET", f"/usage-records/{record_id}")

    def create_usage_record(self, payload: Dict[str, Any]) -> Result:
        """Record a shave.

        ``payload`` needs ``usage_time`` (ISO string), ``razor_id`` and
        ``blade_id``; the other fields are optional.
        """
        return self._request("POST", "/usage-records", json_body=payload)

    def update_usage_record(self, record_id: int, payload: Dict[str, Any]) -> Result:
        return self._request("PUT", f"/usage-records/{record_id}", json_body=payload)

    def delete_usage_record(self, record_id: int) -> Result:
        return self._request("DELETE", f"/usage-records/{record_id}")

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------
    def get_dashboard(self) -> Result:
        return self._request("GET", "/dashboard")

    def get_statistics(self) -> Result:
        return self._request("GET", "/statistics")

    def health(self) -> Result:
        return self._request("GET", "/health", prefixed=False)
