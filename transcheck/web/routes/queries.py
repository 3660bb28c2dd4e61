"""Hover, locations and diagnostics queries."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from transcheck.web.state import get_json_object, get_state, parse_position, require_string

queries_bp = Blueprint("queries", __name__)


@queries_bp.post("/hover")
def hover():
    """Translated values of the identifier under the cursor, or null."""
    data = get_json_object()
    uri = require_string(data, "uri")
    position = parse_position(data)

    state = get_state()
    with state.lock:
        result = state.provider.hover(uri, position)
    return jsonify({"hover": result.to_dict() if result is not None else None})


@queries_bp.post("/locations")
def locations():
    data = get_json_object()
    uri = require_string(data, "uri")
    position = parse_position(data)

    state = get_state()
    with state.lock:
        result = state.provider.locations(uri, position)
    return jsonify({"locations": [location.to_dict() for location in result]})


@queries_bp.get("/diagnostics")
def diagnostics():
    """Last published diagnostics for one URI, or every flagged URI."""
    uri = request.args.get("uri")
    state = get_state()
    with state.lock:
        if uri:
            payload = {uri: [item.to_dict() for item in state.collector.get(uri)]}
        else:
            payload = {
                key: [item.to_dict() for item in items]
                for key, items in state.collector.all().items()
            }
    return jsonify({"diagnostics": payload})
