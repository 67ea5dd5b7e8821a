import base64
import logging
from flask import Blueprint, jsonify, request

from backend.core import config
from backend.services.db import load_accident_events, load_speed_limits
from backend.services.encoding import figure_to_jpeg
from backend.services.system import log_mem
from backend.services.visuals import build_timeline_wrapper, plot_final_frame_wrapper
from src.data.normalize_inputs import normalize_inputs, normalize_race_inputs
from src.visuals.core import constants
from src.visuals.plots.histogram import available_years, plot_speed_histogram

logger = logging.getLogger(__name__)

bp = Blueprint("images", __name__)


def _encode_figure(fig) -> str:
    return base64.b64encode(figure_to_jpeg(fig)).decode("utf-8")


@bp.route("/generate_image", methods=["POST"])
def generate_image():
    """Generate a static bar plot of the race's final keyframe.

    Args:
        None. Reads an optional JSON body with keys: ``top_n``, ``sub_steps``,
        ``start_date``, ``cutoff_date``.

    Returns:
        flask.Response: JSON with Base64-encoded ``image`` and ``filename``.
        4xx/5xx with ``error`` message on bad input or failure.
    """
    try:
        params = normalize_race_inputs(request.get_json(silent=True) or {})
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400

    try:
        log_mem("Start /generate_image")
        events = load_accident_events(config.ACCIDENTS_CSV)
        if events is None:
            return jsonify({"error": "Accident data is not available."}), 404
        timeline = build_timeline_wrapper(
            events,
            params["top_n"],
            params["sub_steps"],
            params["start_date"],
            params["cutoff_date"],
        )
        fig = plot_final_frame_wrapper(timeline, constants.figsize, constants.dpi)
        log_mem("After plot_final_frame")
        return jsonify(
            {"image": _encode_figure(fig), "filename": "circumstance_race_final_frame.jpg"}
        ), 200
    except Exception as e:
        logger.exception("image generation failed")
        return jsonify({"error": f"Image generation failed: {str(e)}"}), 500


@bp.route("/generate_histogram", methods=["POST"])
def generate_histogram():
    """Generate the speed-limit histogram.

    Args:
        None. Reads an optional JSON body with keys: ``mode`` ("Total" /
        "Compare" or "total" / "compare"), ``year1``, ``year2``.

    Returns:
        flask.Response: JSON with Base64-encoded ``image``, ``filename`` and
        the ``years`` available for comparison. 400 on bad input, 404 if the
        dataset is missing, 500 on failure.
    """
    data = request.get_json(silent=True) or {}
    try:
        df = load_speed_limits(config.SPEED_LIMIT_CSV)
        if df is None:
            return jsonify({"error": "Speed limit data is not available."}), 404
        years = available_years(df)
    except Exception as e:
        logger.exception("loading speed limits failed")
        return jsonify({"error": f"Histogram generation failed: {str(e)}"}), 500

    try:
        mode, year1, year2 = normalize_inputs(
            data.get("mode"), data.get("year1"), data.get("year2"), years
        )
        fig = plot_speed_histogram(df, mode, year1, year2)
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400

    return jsonify(
        {
            "image": _encode_figure(fig),
            "filename": f"speed_limit_{mode}.jpg",
            "years": years,
        }
    ), 200
