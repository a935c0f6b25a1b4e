"""/api/courses: list the caller's active Canvas courses.

Credentials come from the JSON body (POST), the query string (GET) or the
configured defaults, in that order.
"""

import json
import logging
from dataclasses import asdict, dataclass

from api._helpers import COURSES_PATH, CanvasClient, UpstreamFailure
from config import Settings

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description available"
COURSE_QUERY_PARAMS = {
    "enrollment_state": "active",
    "include[]": "total_students",
}


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class CourseQueryError(Exception):
    status_code = 500


class InvalidRequest(CourseQueryError):
    status_code = 400


class MissingCredential(CourseQueryError):
    status_code = 400


class UpstreamUnauthorized(CourseQueryError):
    status_code = 401


class UpstreamError(CourseQueryError):
    status_code = 500


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class CredentialContext:
    api_key: str | None
    api_base_url: str

    def __repr__(self) -> str:
        return f"CredentialContext(api_key={key_prefix(self.api_key)!r}, api_base_url={self.api_base_url!r})"


@dataclass(frozen=True)
class CourseSummary:
    id: str
    name: str
    code: str = ""
    description: str = NO_DESCRIPTION
    students: int = 0


def key_prefix(api_key: str | None) -> str:
    """Loggable prefix of a key: at most 8 characters and at most half of it."""
    if not api_key:
        return ""
    return f"{api_key[:min(8, len(api_key) // 2)]}..."


# ---------------------------------------------------------------------------
# Credential resolution
# ---------------------------------------------------------------------------
def resolve_credentials(method: str, body: str | None, query, defaults: Settings) -> CredentialContext:
    """
    Pick the Canvas key and base URL for one request.

    ``body`` is the raw request body when it was sent as JSON, otherwise None.
    ``query`` is any mapping of query-string parameters.
    """
    method = method.upper()

    if method == "POST" and body is not None:
        try:
            data = json.loads(body) if body.strip() else {}
        except ValueError as e:
            logger.error("Error processing JSON: %s", e)
            raise InvalidRequest(f"Invalid request: {e}") from e

        if isinstance(data, dict) and data.get("api_key"):
            api_key, api_url = data["api_key"], data.get("api_url")
            if not isinstance(api_key, str) or (api_url and not isinstance(api_url, str)):
                logger.error("Non-string api_key or api_url in request body")
                raise InvalidRequest("Invalid request: api_key and api_url must be strings")
            logger.info("Using API key from request: %s", key_prefix(api_key))
            return CredentialContext(api_key, api_url or defaults.canvas_api_url)
        logger.info("No API key provided in request, using default")

    elif method == "GET":
        if query.get("api_key"):
            api_key = query["api_key"]
            logger.info("Using API key from query: %s", key_prefix(api_key))
            return CredentialContext(api_key, query.get("api_url") or defaults.canvas_api_url)
        logger.info("No API key provided in query parameters")

    return CredentialContext(defaults.canvas_api_key, defaults.canvas_api_url)


def require_key(context: CredentialContext) -> CredentialContext:
    if not context.api_key:
        raise MissingCredential("Canvas API key not provided")
    return context


# ---------------------------------------------------------------------------
# Shaping
# ---------------------------------------------------------------------------
def _to_int(value) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def parse_course(raw: dict) -> CourseSummary:
    """Normalise a Canvas course record."""
    raw_id = raw.get("id")
    code = str(raw.get("course_code") or "")
    return CourseSummary(
        id="" if raw_id is None else str(raw_id),
        name=str(raw["name"]),
        code=code,
        description=code or NO_DESCRIPTION,
        students=_to_int(raw.get("total_students")),
    )


def shape_courses(payload) -> list[CourseSummary]:
    """Drop unnamed and date-restricted courses, keep upstream order."""
    if not isinstance(payload, list):
        logger.warning("Unexpected Canvas API response structure: %r", payload)
        return []

    return [
        parse_course(c)
        for c in payload
        if isinstance(c, dict) and c.get("name") and not c.get("access_restricted_by_date")
    ]


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------
class CourseQueryHandler:
    """Resolves credentials, calls Canvas and shapes the result for one request at a time."""

    def __init__(self, settings: Settings, client: CanvasClient | None = None):
        self.settings = settings
        self.client = client or CanvasClient(timeout=settings.request_timeout)

    def fetch_courses(self, context: CredentialContext) -> list[CourseSummary]:
        logger.info("Fetching courses from: %s", context.api_base_url)
        try:
            payload = self.client.get(
                context.api_base_url, COURSES_PATH, context.api_key, COURSE_QUERY_PARAMS
            )
        except UpstreamFailure as e:
            logger.error("API Error: %s", e)
            if e.status_code == 401:
                raise UpstreamUnauthorized(
                    "Canvas API access unauthorized. Please check your API key."
                ) from e
            raise UpstreamError(f"Failed to fetch courses: {e}") from e

        courses = shape_courses(payload)
        logger.info("Successfully fetched %d courses", len(courses))
        return courses

    def handle(self, method: str, body: str | None, query) -> list[dict]:
        context = require_key(resolve_credentials(method, body, query, self.settings))
        return [asdict(c) for c in self.fetch_courses(context)]
