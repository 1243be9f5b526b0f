"""
Flask routes for the Outline Loop API.
"""

import logging

from flask import Blueprint, request, jsonify

from config import log_event, resolve_project_name, RECOMMENDED_MODELS
from models import OutlineSession
from services.markdown import NoActiveDocument, list_documents
from services.ai import AuthError, RewriteError
from services.reconciler import StaleOutline
from services.processing import (
    SessionNotFound,
    SessionBusy,
    open_session,
    get_session,
    close_session,
    update_outline_text,
    enhance_session,
    apply_session,
    get_settings,
    update_settings,
)

EDITOR_INSTRUCTIONS = (
    'Edit heading levels (#), text, or remove lines. '
    'Keep the ID markers (e.g., "H1|") for accurate matching.'
)

# Create blueprint
api = Blueprint('api', __name__)


def session_payload(session: OutlineSession) -> dict:
    return {
        "session_id": session.id,
        "project": session.project,
        "outline": session.outline_text,
        "headings": len(session.headings),
        "processing": session.is_processing,
        "ai_enabled": get_settings().ai_enabled,
        "instructions": EDITOR_INSTRUCTIONS,
    }


# --- ERROR HANDLERS ---

@api.errorhandler(NoActiveDocument)
def handle_no_document(e):
    return jsonify({"error": str(e)}), 404


@api.errorhandler(SessionNotFound)
def handle_session_not_found(e):
    log_event(logging.WARNING, "outline_session_not_found", session=str(e))
    return jsonify({"error": "Outline editor session not found"}), 404


@api.errorhandler(SessionBusy)
def handle_session_busy(e):
    return jsonify({"error": "AI enhancement already in progress"}), 409


@api.errorhandler(StaleOutline)
def handle_stale_outline(e):
    return jsonify({"error": f"{e}; reopen the outline editor"}), 409


# --- STATUS ---

@api.route('/health')
def health():
    """Health check endpoint."""
    settings = get_settings()
    return jsonify({
        "status": "ok",
        "ai_enabled": settings.ai_enabled,
        "model": settings.model,
    })


@api.route('/api/documents')
def documents():
    return jsonify({"documents": list_documents()})


# --- OUTLINE EDITOR ---

@api.route('/api/outline', methods=['POST'])
def open_outline():
    """Open the outline editor against the requested document."""
    data = request.get_json(silent=True) or {}
    project = resolve_project_name(data.get('project') or request.args.get('project'))
    if not project:
        raise NoActiveDocument()

    session = open_session(project)
    return jsonify(session_payload(session)), 201


@api.route('/api/outline/<session_id>', methods=['GET'])
def show_outline(session_id):
    return jsonify(session_payload(get_session(session_id)))


@api.route('/api/outline/<session_id>', methods=['PUT'])
def edit_outline(session_id):
    """Replace the editable outline with user-typed text."""
    data = request.get_json(silent=True) or {}
    outline = data.get('outline')
    if not isinstance(outline, str):
        return jsonify({"error": "No outline provided"}), 400

    session = update_outline_text(session_id, outline)
    return jsonify(session_payload(session))


@api.route('/api/outline/<session_id>/enhance', methods=['POST'])
async def enhance_outline(session_id):
    """Run the AI rewrite over the session's outline."""
    try:
        session = await enhance_session(session_id)
    except AuthError as e:
        return jsonify({"error": str(e)}), 400
    except RewriteError as e:
        log_event(logging.ERROR, "outline_enhance_failed", session=session_id, error=str(e))
        return jsonify({"error": f"Error: {e}"}), 502

    payload = session_payload(session)
    payload["message"] = "Outline enhanced with AI!"
    return jsonify(payload)


@api.route('/api/outline/<session_id>/apply', methods=['POST'])
def apply_outline(session_id):
    """Write the edited outline back into the document."""
    data = request.get_json(silent=True) or {}
    outline = data.get('outline')
    if outline is not None and not isinstance(outline, str):
        return jsonify({"error": "Outline must be text"}), 400

    result = apply_session(session_id, outline)
    return jsonify({
        "changed": result.changed,
        "modified": result.modified,
        "deleted": result.deleted,
        "added": result.added,
        "message": result.message,
    })


@api.route('/api/outline/<session_id>', methods=['DELETE'])
def cancel_outline(session_id):
    if close_session(session_id) is None:
        raise SessionNotFound(session_id)
    return jsonify({"status": "closed", "session_id": session_id})


# --- SETTINGS ---

@api.route('/api/settings', methods=['GET'])
def show_settings():
    return jsonify(get_settings().to_public_dict())


@api.route('/api/settings', methods=['PUT'])
def change_settings():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Settings must be a JSON object"}), 400

    settings = update_settings(data)
    return jsonify(settings.to_public_dict())


@api.route('/api/models')
def recommended_models():
    """Popular OpenRouter models."""
    return jsonify({
        "models": RECOMMENDED_MODELS,
        "recommended": RECOMMENDED_MODELS[0],
        "catalog": "https://openrouter.ai/models",
    })
