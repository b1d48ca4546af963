"""
This module contains the Flask application that serves the pickup widget data.
"""

import logging

from flask import Flask, jsonify, request

from waste_calendar.config import WIDGET_HOST, WIDGET_PORT

logger = logging.getLogger(__name__)

app = Flask(__name__)


@app.route("/api/waste-data")
def waste_data():
    """Returns the exposed capabilities and the parsed next pickup countdown."""
    facade = app.config.get("FACADE")
    if facade is None:
        logger.error("Widget requested before the facade was configured.")
        return jsonify([])
    data = facade.get_widget_data(
        device_id=request.args.get("deviceId"),
        locale=request.args.get("locale"),
    )
    return jsonify(data)


@app.route("/api/tomorrow")
def tomorrow():
    """Returns what is picked up tomorrow, as text and per category."""
    facade = app.config.get("FACADE")
    if facade is None:
        return jsonify({"wasteType": "", "categories": {}})
    return jsonify(
        {
            "wasteType": facade.get_waste_type_tomorrow(),
            "categories": facade.get_tomorrow_flags(),
        }
    )


@app.route("/api/is-specific-waste")
def is_specific_waste():
    """Flow condition: ?wasteType=paper&when=tomorrow"""
    facade = app.config.get("FACADE")
    if facade is None:
        return jsonify({"result": False})
    result = facade.is_specific_waste(
        request.args.get("wasteType", ""), request.args.get("when", "")
    )
    return jsonify({"result": result})


def run_widget(facade, host: str = WIDGET_HOST, port: int = WIDGET_PORT) -> None:
    """Serves the widget endpoints for the given facade."""
    app.config["FACADE"] = facade
    app.run(host=host, port=port)
