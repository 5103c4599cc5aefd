"""
Minimal GitLab REST client (v4) using stdlib urllib.
"""

from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from .errors import MergeRequestLookupError

DEFAULT_BASE_URL = "https://gitlab.com"
API_PREFIX = "/api/v4"


class GitLabClient:
    def __init__(self, base_url: str, access_token: str | None, timeout: float = 8.0) -> None:
        base = (base_url or DEFAULT_BASE_URL).rstrip("/")
        u = urllib.parse.urlparse(base)
        if u.scheme not in ("http", "https") or not u.netloc:
            raise ValueError(f"invalid GitLab base URL: {base_url!r}")
        self.base_api = base if base.endswith(API_PREFIX) else base + API_PREFIX
        self.access_token = access_token
        self.timeout = timeout

    # ----- Helpers -----
    def _headers(self) -> dict[str, str]:
        h = {"User-Agent": "MrBot/1.0", "Accept": "application/json"}
        if self.access_token:
            h["PRIVATE-TOKEN"] = self.access_token
        return h

    def _get_json(self, path: str) -> Any:
        req = urllib.request.Request(self.base_api + path, headers=self._headers())
        with urllib.request.urlopen(req, timeout=self.timeout) as resp:  # nosec B310
            data = resp.read()
        return json.loads(data.decode("utf-8"))

    # ----- Public APIs -----
    def get_merge_request(self, project_path: str, iid: int) -> dict[str, Any]:
        """Fetch one merge request by project path (``group/project``) and iid."""
        path = f"/projects/{urllib.parse.quote(project_path, safe='')}/merge_requests/{int(iid)}"
        try:
            data = self._get_json(path)
        except urllib.error.HTTPError as e:
            e.close()
            raise MergeRequestLookupError(project_path, iid, e.reason or "http error", e.code) from e
        except urllib.error.URLError as e:
            raise MergeRequestLookupError(project_path, iid, str(e.reason)) from e
        except TimeoutError as e:
            raise MergeRequestLookupError(project_path, iid, "timed out") from e
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MergeRequestLookupError(project_path, iid, "invalid response body") from e
        # Dropped connections and truncated bodies come straight from http.client.
        except (http.client.HTTPException, OSError) as e:
            raise MergeRequestLookupError(project_path, iid, str(e) or type(e).__name__) from e
        if not isinstance(data, dict):
            raise MergeRequestLookupError(project_path, iid, "unexpected response shape")
        return data
