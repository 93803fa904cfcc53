"""Analyze API: POST /api/analyze. Streams NDJSON progress events."""
import logging

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from contractai.analysis.errors import CapabilityNotConfiguredError, InvalidInputError
from contractai.api.streaming import iter_ndjson
from contractai.extraction import DocumentSubmission, ExtractionError, prepare_document
from contractai.streaming.ndjson import NDJSON_MEDIA_TYPE

logger = logging.getLogger(__name__)

bp = Blueprint("analyze", __name__, url_prefix="/api")

USER_HEADER = "X-User-Id"


def _error(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


@bp.route("/analyze", methods=["POST"])
def analyze():
    """POST /api/analyze. Body: type (pdf|text), content, name, optional encoding (text|base64)."""
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return _error("Request body must be a JSON object", 400)
    try:
        submission = DocumentSubmission.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        return _error(f"Invalid request body: {fields}", 400)

    analyzer = current_app.extensions["contract_analyzer"]
    try:
        document = prepare_document(submission, current_app.extensions.get("extraction_settings"))
        analyzer.validate(document)
    except CapabilityNotConfiguredError as e:
        logger.error("analyze rejected: %s", e)
        return _error(str(e), 503)
    except (ExtractionError, InvalidInputError) as e:
        logger.info("analyze rejected (%s): %s", e.code, e)
        return _error(str(e), 400)

    user_id = request.headers.get(USER_HEADER)
    logger.info("streaming analysis of %r (%d chars) for user %s", document.name, len(document.content), user_id)
    return Response(
        iter_ndjson(lambda: analyzer.stream(document, user_id=user_id)),
        mimetype=NDJSON_MEDIA_TYPE,
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
