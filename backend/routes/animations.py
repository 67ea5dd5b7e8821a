import base64
import logging
import time

from flask import Blueprint, jsonify, request

from backend.core import config
from backend.services.db import load_accident_events
from backend.services.system import log_mem
from backend.services.visuals import (
    build_timeline_wrapper,
    keyframes_to_json,
    render_race_gif,
)
from src.data.normalize_inputs import normalize_race_inputs
from src.visuals.core import constants

logger = logging.getLogger(__name__)

bp = Blueprint("animations", __name__)


@bp.route("/race/keyframes", methods=["POST"])
def race_keyframes():
    """Return the bar-chart race keyframes as JSON.

    Expects an optional JSON body with:
    - top_n (int): Visible ranks. Defaults to 10.
    - sub_steps (int): Interpolated keyframes per month. Defaults to 4.
    - start_date (str): ISO date of the first month. Defaults to 2015-01-31.
    - cutoff_date (str): ISO date bound. Defaults to 2024-12-31.

    Returns:
        flask.Response: JSON with ``keyframes`` (date + ranked entries),
        ``top_n`` and ``duration_ms``. 400 on bad parameters, 404 if the
        dataset is missing, 500 on failure.
    """
    try:
        data = request.get_json(silent=True) or {}
        params = normalize_race_inputs(data)
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400

    try:
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
        return jsonify(
            {
                "keyframes": keyframes_to_json(timeline),
                "top_n": timeline.top_n,
                "duration_ms": params["duration_ms"],
            }
        ), 200
    except Exception as e:
        logger.exception("keyframe generation failed")
        return jsonify({"error": f"Keyframe generation failed: {str(e)}"}), 500


@bp.route("/generate_animation", methods=["POST"])
def generate_animation():
    """Generate a GIF of the bar-chart race.

    Expects the same optional JSON body as ``/race/keyframes``, plus:
    - duration_ms (int): Transition length per keyframe. Defaults to 100.
    - fps (int): Capture and playback frame rate. Defaults to ``GIF_FPS``.
    - dpi (int): Figure DPI for frames. Defaults to 60.

    Returns:
        flask.Response: JSON containing base64-encoded GIF under key "video"
        and a suggested filename under key "filename". 400 on bad parameters
        or too many keyframes, 404 if the dataset is missing, 500 on failure.
    """
    try:
        data = request.get_json(silent=True) or {}
        params = normalize_race_inputs(data)
        fps = int(data.get("fps", config.GIF_FPS))
        dpi = int(data.get("dpi", constants.dpi))
        if fps <= 0 or fps > 60:
            raise ValueError("invalid fps")
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400

    try:
        t0 = time.time()
        log_mem("Start /generate_animation")
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
        if len(timeline.keyframes) > config.MAX_ANIMATION_KEYFRAMES:
            return jsonify(
                {
                    "error": f"Too many keyframes ({len(timeline.keyframes)}); narrow the date range or lower sub_steps."
                }
            ), 400
        t1 = time.time()
        logger.info("Time to build timeline: %.2f seconds", t1 - t0)

        gif_bytes = render_race_gif(
            timeline,
            duration_ms=params["duration_ms"],
            fps=fps,
            figsize=constants.figsize,
            dpi=dpi,
        )
        t2 = time.time()
        logger.info("Frame capture and GIF encoding time: %.2f seconds", t2 - t1)
        log_mem("After render_race_gif")

        video_base64 = base64.b64encode(gif_bytes).decode("utf-8")
        return jsonify(
            {"video": video_base64, "filename": "circumstance_race_animation.gif"}
        ), 200
    except Exception as e:
        logger.exception("animation generation failed")
        return jsonify({"error": f"Animation generation failed: {str(e)}"}), 500
