import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS

from backend.core import config
from backend.routes.animations import bp as animations_bp
from backend.routes.images import bp as images_bp
from backend.routes.visualizations import bp as visualizations_bp


def _configure_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    gunicorn_error = logging.getLogger("gunicorn.error")
    root = logging.getLogger()
    if gunicorn_error.handlers:
        root.handlers = gunicorn_error.handlers
        root.setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    # Agg and Pillow are chatty at DEBUG
    for noisy in ("werkzeug", "matplotlib", "PIL"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


_configure_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)

# register routes
app.register_blueprint(visualizations_bp)
app.register_blueprint(images_bp)
app.register_blueprint(animations_bp)


@app.errorhandler(404)
def not_found(_error):
    return jsonify({"error": "Not found"}), 404


@app.errorhandler(405)
def method_not_allowed(_error):
    return jsonify({"error": "Method not allowed"}), 405


logger.info(
    "backend ready (ENV=%s, accidents=%s, speed limits=%s)",
    config.ENV,
    config.ACCIDENTS_CSV,
    config.SPEED_LIMIT_CSV,
)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "8080")))
