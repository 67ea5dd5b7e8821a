from flask import Blueprint, jsonify

from backend.core.registry import VISUALIZATIONS, get_visualization, render_embed

bp = Blueprint("visualizations", __name__)


def _summary(viz_id: str, viz: dict) -> dict:
    return {
        "id": viz_id,
        "title": viz["title"],
        "description": viz["description"],
        "kind": viz["kind"],
    }


@bp.route("/visualizations", methods=["GET"])
def list_visualizations():
    """List the visualizations in menu order.

    Returns:
        flask.Response: JSON list of ``id``, ``title``, ``description``, ``kind``.
    """
    return jsonify([_summary(viz_id, viz) for viz_id, viz in VISUALIZATIONS.items()]), 200


@bp.route("/visualizations/<viz_id>", methods=["GET"])
def show_visualization(viz_id: str):
    """Return one visualization's page content.

    Returns:
        flask.Response: JSON with the summary fields plus ``details`` HTML and,
        for embedded dashboards, ``embed`` HTML. 404 for unknown ids.
    """
    try:
        viz = get_visualization(viz_id)
    except KeyError:
        return jsonify({"error": f"Visualization '{viz_id}' not found"}), 404
    return jsonify(
        {**_summary(viz_id, viz), "details": viz["details"], "embed": render_embed(viz)}
    ), 200
