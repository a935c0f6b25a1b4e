from fnmatch import fnmatch

from dotenv import load_dotenv
from flask import Flask, request, send_from_directory

from api._helpers import CanvasClient
from api.courses import CourseQueryHandler
from config import Settings, configure_logging, load_settings

load_dotenv()


def create_app(settings: Settings | None = None, client: CanvasClient | None = None) -> Flask:
    settings = settings or load_settings()

    app = Flask(__name__, static_folder="static")
    app.config["SETTINGS"] = settings
    app.extensions["course_handler"] = CourseQueryHandler(settings, client)

    # -----------------------------------------------------------------------
    # Register Blueprints
    # -----------------------------------------------------------------------
    from routes.courses import courses_bp  # /api/courses

    app.register_blueprint(courses_bp)

    # -----------------------------------------------------------------------
    # Extension page
    # -----------------------------------------------------------------------
    @app.route("/")
    def index():
        return send_from_directory(app.static_folder, "focus.html")

    # -----------------------------------------------------------------------
    # CORS  (browser extension and local pages only)
    # -----------------------------------------------------------------------
    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin and any(fnmatch(origin, p) for p in settings.cors_origins):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
            response.vary.add("Origin")
        return response

    return app


app = create_app()


def main() -> None:
    settings = app.config["SETTINGS"]
    configure_logging(settings.log_level)
    app.logger.info("Starting server on port %d", settings.port)
    app.run(host="0.0.0.0", port=settings.port, debug=False)


if __name__ == "__main__":
    main()
