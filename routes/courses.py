"""
Course listing routes.

Blueprint prefix: /api
"""

from flask import Blueprint, current_app, jsonify, request

from api.courses import CourseQueryError

courses_bp = Blueprint("courses", __name__)


@courses_bp.route("/api/courses", methods=["GET", "POST"])
def list_courses():
    """Active courses for the key in the JSON body (POST) or query string (GET)."""
    handler = current_app.extensions["course_handler"]
    body = request.get_data(as_text=True) if request.is_json else None
    return jsonify(handler.handle(request.method, body, request.args))


@courses_bp.errorhandler(CourseQueryError)
def course_query_error(e):
    return jsonify({"error": str(e)}), e.status_code
