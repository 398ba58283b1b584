"""Client for the shows/events REST API."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from .errors import FetchError

DEFAULT_BASE_URL = "http://127.0.0.1:8000/api"
SHOWS_ENDPOINT = "/shows/"
EVENTS_ENDPOINT = "/events/"


class APIClient:
    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        *,
        dump_json: bool = False,
        offline: bool = False,
        timeout: float = 30,
    ) -> None:
        self.base_url = (
            base_url or os.getenv("SHOW_CALENDAR_API_URL") or DEFAULT_BASE_URL
        ).rstrip("/")
        self.token = token if token is not None else os.getenv("SHOW_CALENDAR_ACCESS_TOKEN")
        self.dump_json = dump_json
        self.offline = offline
        self.timeout = timeout
        self.session = requests.Session()
        self.json_dir = Path("out/json")
        if dump_json:
            self.json_dir.mkdir(parents=True, exist_ok=True)

    def _json_path(self, endpoint: str) -> Path:
        name = endpoint.strip("/").replace("/", "_") + ".json"
        return self.json_dir / name

    def get(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Any:
        if self.offline:
            path = self._json_path(endpoint)
            try:
                with path.open("r", encoding="utf-8") as f:
                    return json.load(f)
            except (OSError, ValueError) as exc:
                raise FetchError(f"Cannot read saved {endpoint} from {path}: {exc}") from exc
        url = self.base_url + endpoint
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        try:
            resp = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as exc:
            logging.warning("Request error: %s", exc)
            raise FetchError(f"Failed to fetch {endpoint}: {exc}") from exc
        except ValueError as exc:
            raise FetchError(f"{endpoint} did not return JSON") from exc
        if self.dump_json:
            with self._json_path(endpoint).open("w", encoding="utf-8") as f:
                json.dump(data, f)
        return data

    def _list(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> List[dict]:
        data = self.get(endpoint, params)
        if isinstance(data, dict):
            data = data.get("results") or []
        if not isinstance(data, list):
            raise FetchError(f"{endpoint} returned {type(data).__name__}, expected a list")
        return data

    def fetch_shows(self, status: str = "published") -> List[dict]:
        return self._list(SHOWS_ENDPOINT, {"status": status})

    def fetch_events(self, status: str = "published") -> List[dict]:
        return self._list(EVENTS_ENDPOINT, {"status": status})
