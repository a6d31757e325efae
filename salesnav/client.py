# HTTP client for the SalesNav Session API.
# Mirrors the endpoints one-to-one; failures carrying `success: false`
# raise SalesNavAPIError.

import os
from typing import Any, Dict, List, Optional

import requests

from salesnav.logging_config import get_logger
from salesnav.session import SearchRequest

SALESNAV_API_URL = os.getenv("SALESNAV_API_URL", "http://localhost:8000")

logger = get_logger(__name__)


class SalesNavAPIError(Exception):
    def __init__(self, status_code: int, message: str, code: Optional[str] = None):
        super().__init__(f"[{status_code}] {message}")
        self.status_code = status_code
        self.message = message
        self.code = code


def request_payload(search: SearchRequest) -> Dict[str, Any]:
    """JSON body for the URL generation endpoints."""
    payload: Dict[str, Any] = {
        "searchType": getattr(search.search_type, "value", search.search_type),
        "keywords": search.keywords,
        "filters": [f.to_dict() for f in search.filters],
        "viewAllFilters": search.view_all_filters,
    }
    if search.session_token is not None:
        payload["sessionId"] = search.session_token.encoded
    return payload


class SalesNavClient:
    def __init__(self, base_url: str = SALESNAV_API_URL, timeout: float = 30, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _handle(self, resp: requests.Response) -> Dict[str, Any]:
        try:
            data = resp.json()
        except ValueError:
            resp.raise_for_status()
            raise SalesNavAPIError(resp.status_code, "Response is not JSON")
        if not isinstance(data, dict):
            raise SalesNavAPIError(resp.status_code, f"Expected a JSON object, got {type(data).__name__}")
        if resp.status_code >= 400 or not data.get("success", False):
            logger.warning("api_call_failed", status=resp.status_code, error=data.get("error"))
            raise SalesNavAPIError(resp.status_code, data.get("error", "Request failed"), data.get("code"))
        return data

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        resp = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        return self._handle(resp)

    def _get(self, path: str) -> Dict[str, Any]:
        resp = self.session.get(f"{self.base_url}{path}", timeout=self.timeout)
        return self._handle(resp)

    # -------------------------
    # Endpoints
    # -------------------------
    def extract_session(self, url: str) -> Dict[str, Any]:
        return self._post("/extract-session", {"url": url})

    def generate_url_with_session(self, search: SearchRequest) -> str:
        return self._post("/generate-url-with-session", request_payload(search))["url"]

    def generate_url(self, search: SearchRequest) -> str:
        return self._post("/generate-url", request_payload(search))["url"]

    def parse_url(self, url: str) -> Dict[str, Any]:
        return self._post("/parse-url", {"url": url})

    def filter_types(self) -> Dict[str, Any]:
        return self._get("/filter-types")

    def validate_filters(self, search_type: str, filters: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self._post("/validate-filters", {"searchType": search_type, "filters": filters})
