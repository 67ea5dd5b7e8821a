"""Registry of the visualizations offered by the navigation shell.

Each entry carries its page metadata and how it is rendered: the bar-chart
race and histogram are generated here, the map and dashboards are embedded.
"""

import logging
from html import escape

logger = logging.getLogger(__name__)

TABLEAU_SCRIPT = "https://public.tableau.com/javascripts/api/viz_v1.js"

VISUALIZATIONS: dict[str, dict] = {
    "accident-circumstances": {
        "title": "What's Wrecking Our Roads? (2015–2024)",
        "description": "The Great Circumstance Showdown — what is causing the most chaos on the roads?",
        "details": (
            "<h3>About This Visualization</h3>"
            "<p>This bar chart race shows the cumulative number of traffic accidents by their "
            "attributed circumstances from 2015 to 2024. The animation reveals which factors have "
            "consistently been the most dangerous on our roads and how their relative impact has "
            "changed over time.</p>"
        ),
        "kind": "race",
    },
    "traffic-volume": {
        "title": "Fast, Furious... and Frequently Crashed (2015–2024)",
        "description": "From slow zones to high-speed stretches, the chart shows which speed limits see the most action — and potentially, the most trouble.",
        "details": (
            "<h3>About This Visualization</h3>"
            "<p>This interactive histogram highlights the most common speed limits associated with "
            "road incidents from 2015 to 2024.</p>"
            '<p>Use the "Compare" mode to explore how the frequency of incidents at different speed '
            "limits has changed between any two years — and spot shifts or patterns in crash "
            "distribution over time.</p>"
        ),
        "kind": "histogram",
    },
    "accident-map": {
        "title": "Where It Hits Hardest (2015–2024)",
        "description": "See the crash patterns unfold across Montgomery County — hour by hour, dot by dot.",
        "details": (
            "<h3>About This Visualization</h3>"
            "<p>This animated heatmap shows the hourly geographic distribution of traffic accidents "
            "across Montgomery County from 2015 to 2024. Each dot represents a crash location, "
            "pulsing according to the time of day it occurred.</p>"
        ),
        "kind": "iframe",
        "src": "map.html",
    },
    "when-dashboard": {
        "title": "When are Traffic Accidents Most Frequent? Trends & High-Risk Periods",
        "description": "Who knew rush hour could be so... crashy? This dashboard dives into when traffic accidents strike hardest — whether it's sleepy mornings, chaotic evenings, or even those deceptively peaceful holidays. Spoiler: no day is truly safe.",
        "details": (
            "<h3>About This Visualization</h3>"
            "<p>This dashboard shows the yearly trend of traffic accidents, highlights high-risk time "
            "periods across weekdays and weekends, and compares average accident rates on holidays "
            "versus regular days.</p>"
            '<p>To explore a specific year in greater detail, click on a year along the x-axis of the '
            '"Yearly Trend of Traffic Accidents" chart. This will filter the entire dashboard '
            "accordingly.</p>"
        ),
        "kind": "tableau",
        "workbook": "whenaccidents/WHENDashboard",
        "static_image": "https://public.tableau.com/static/images/wh/whenaccidents/WHENDashboard/1.png",
    },
    "how-dashboard": {
        "title": "How Severe are Traffic Accidents? Exploring Injury Patterns and Causes",
        "description": "From slippery roads to suspiciously sober drivers — this dashboard spills the tea on what really makes traffic accidents worse.",
        "details": (
            "<h3>About This Visualization</h3>"
            "<p>This dashboard explores how various environmental conditions, substance abuse "
            "factors, and safety measures impact the severity of traffic accidents.</p>"
            "<p>Filters are available to narrow down the data by year, month, and injury severity "
            "for a more focused analysis.</p>"
        ),
        "kind": "tableau",
        "workbook": "HowSeverearrTrafficAccidents/joviDashboard",
        "static_image": "https://public.tableau.com/static/images/Ho/HowSeverearrTrafficAccidents/joviDashboard/1.png",
    },
}

_TABLEAU_PARAMS = {
    "embed_code_version": "3",
    "site_root": "",
    "tabs": "no",
    "toolbar": "yes",
    "animate_transition": "yes",
    "display_static_image": "yes",
    "display_spinner": "yes",
    "display_overlay": "yes",
    "display_count": "yes",
    "language": "en-GB",
    "filter": "publish=yes",
}


def get_visualization(viz_id: str) -> dict:
    """Return the registry entry for ``viz_id``.

    Raises:
        KeyError: If the id is not registered.
    """
    try:
        return VISUALIZATIONS[viz_id]
    except KeyError:
        logger.error("Visualization '%s' not found in registry", viz_id)
        raise


def render_embed(viz: dict) -> str | None:
    """HTML snippet embedding an external visualization, or None if generated here."""
    if viz["kind"] == "iframe":
        return (
            '<div style="width: 100%; height: 600px; border-radius: 12px; overflow: hidden;">'
            f'<iframe src="{escape(viz["src"])}" width="100%" height="100%" '
            'style="border: none; border-radius: 12px;"></iframe></div>'
        )
    if viz["kind"] == "tableau":
        params = {"host_url": "https%3A%2F%2Fpublic.tableau.com%2F", **_TABLEAU_PARAMS}
        params["name"] = viz["workbook"]
        param_tags = "".join(
            f'<param name="{name}" value="{escape(value)}" />'
            for name, value in params.items()
        )
        return (
            "<div class='tableauPlaceholder' id='vizResponsiveContainer' "
            "style='width: 100%; height: 80vh; position: relative;'>"
            f'<noscript><a href="#"><img alt="{escape(viz["title"])}" '
            f'src="{escape(viz["static_image"])}" style="border: none" /></a></noscript>'
            '<object class="tableauViz" style="width: 100%; height: 100%; display: block;">'
            f"{param_tags}</object></div>"
            f'<script src="{TABLEAU_SCRIPT}"></script>'
        )
    return None
