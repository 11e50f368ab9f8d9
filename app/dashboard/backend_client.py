from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


class BackendError(RuntimeError):
    pass


class BackendUnavailable(BackendError):
    """Transport failure: refused connection, DNS, timeout."""


class BackendRejected(BackendError):
    def __init__(self, status: int, body: str = "") -> None:
        super().__init__(f"HTTP {status} from backend: {body[:300]}")
        self.status = status
        self.body = body


@dataclass(frozen=True)
class BackendClient:
    base_url: str
    timeout_seconds: float = 10.0

    def _url(self, path: str) -> str:
        return self.base_url.rstrip("/") + path

    def _send(self, req: urllib.request.Request, path: str) -> bytes:
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_seconds) as resp:
                return resp.read()
        except urllib.error.HTTPError as e:
            try:
                body = e.read().decode("utf-8", errors="ignore")
            except Exception:
                body = ""
            raise BackendRejected(e.code, body) from e
        except (urllib.error.URLError, OSError) as e:
            raise BackendUnavailable(f"Backend unreachable ({path}): {e}") from e

    def get_json(self, path: str) -> Any:
        req = urllib.request.Request(self._url(path), method="GET")
        req.add_header("Accept", "application/json")
        raw = self._send(req, path)
        try:
            return json.loads(raw.decode("utf-8"))
        except Exception as e:
            raise BackendError(f"Invalid JSON from backend ({path})") from e

    def post_json(self, path: str, payload: dict[str, Any]) -> None:
        """
        POST a JSON body. Any 2xx is success; the response body is not parsed.
        No retries: each call is exactly one request.
        """
        data = json.dumps(payload).encode("utf-8")
        req = urllib.request.Request(self._url(path), data=data, method="POST")
        req.add_header("Content-Type", "application/json")
        req.add_header("Accept", "application/json")
        self._send(req, path)


def client_from_config(config: dict) -> BackendClient:
    return BackendClient(
        base_url=(config.get("BACKEND_URL") or "http://localhost:3000").strip(),
        timeout_seconds=float(config.get("BACKEND_TIMEOUT_SECONDS") or 10.0),
    )
