"""Document synchronisation notifications."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from transcheck.core.documents import TextDocument
from transcheck.exceptions import PayloadError
from transcheck.logger import get_logger
from transcheck.web.state import get_json_object, get_state, require_string

documents_bp = Blueprint("documents", __name__)
logger = get_logger(__name__)


@documents_bp.post("/documents")
def document_changed():
    """Accept the full text of an opened or edited document."""
    data = get_json_object()
    uri = require_string(data, "uri")
    language_id = require_string(data, "languageId")
    text = data.get("text")
    if not isinstance(text, str):
        raise PayloadError("'text' must be a string", code="invalid_field", details={"field": "text"})
    version = data.get("version", 0)
    if not isinstance(version, int):
        raise PayloadError("'version' must be an integer", code="invalid_field", details={"field": "version"})

    document = TextDocument(uri=uri, language_id=language_id, text=text, version=version)
    state = get_state()
    with state.lock:
        state.provider.document_changed(document)

    logger.debug("Document changed: %s (%s, v%s)", uri, language_id, version)
    return jsonify({"uri": uri, "version": version})


@documents_bp.delete("/documents")
def document_closed():
    uri = request.args.get("uri")
    if not uri:
        raise PayloadError("Query parameter 'uri' is required", code="invalid_field", details={"field": "uri"})

    state = get_state()
    with state.lock:
        state.provider.document_closed(uri)
    return jsonify({"uri": uri, "closed": True})


@documents_bp.post("/translations/loaded")
def translations_loaded():
    """Signal that bulk loading of translation files has finished."""
    state = get_state()
    with state.lock:
        state.provider.translations_loaded()
        count = len(state.provider.translations)
    return jsonify({"translations": count})
