"""
Shared helpers for talking to the Canvas LMS REST API.

Auth: per-request bearer token (a Canvas access token supplied by the caller)
API base: caller-supplied, e.g. https://canvas.instructure.com

Docs: https://canvas.instructure.com/doc/api/courses.html
"""

import requests

COURSES_PATH = "/api/v1/courses"
DEFAULT_TIMEOUT = 30


class UpstreamFailure(Exception):
    """A Canvas call failed. ``status_code`` is None when no HTTP response came back."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------
class CanvasClient:
    """Thin GET-only wrapper around ``requests``."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, http=requests):
        self.timeout = timeout
        self._http = http

    def get(self, base_url: str, path: str, token: str, params: dict | None = None):
        """GET ``{base_url}{path}`` and return the decoded JSON body."""
        url = f"{base_url.rstrip('/')}{path}"
        try:
            resp = self._http.get(
                url,
                headers={"Authorization": f"Bearer {token}"},
                params=params,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            return resp.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise UpstreamFailure(str(e), status) from e
        except (requests.RequestException, ValueError) as e:
            raise UpstreamFailure(str(e)) from e
