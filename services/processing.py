"""
Outline editor sessions: open, edit, enhance, apply.
"""

import uuid
import logging
from typing import Dict, Optional

from config import log_event, save_settings, OutlineEditorSettings
from models import OutlineSession, ReconcileResult
from state import OUTLINE_SESSIONS, SESSIONS_LOCK, SETTINGS
from services.markdown import extract_headings, read_document, write_document
from services.outline_format import serialize_outline
from services.ai import AuthError, rewrite_outline
from services.reconciler import reconcile_outline


class SessionNotFound(Exception):
    """No open outline editor with that id."""


class SessionBusy(Exception):
    """A rewrite is already running for the session."""


# --- SETTINGS ---

def get_settings() -> OutlineEditorSettings:
    return SETTINGS["current"]


def update_settings(changes: Dict) -> OutlineEditorSettings:
    """Apply and persist a settings change."""
    settings = get_settings().apply(changes)
    save_settings(settings)
    SETTINGS["current"] = settings
    return settings


# --- SESSIONS ---

def _busy_session_for(project_name: str) -> Optional[OutlineSession]:
    """An open session on the document with a rewrite in flight. Caller holds SESSIONS_LOCK."""
    for session in OUTLINE_SESSIONS.values():
        if session.project == project_name and session.is_processing:
            return session
    return None


def open_session(project_name: str) -> OutlineSession:
    """
    Open the outline editor against a document.
    Raises NoActiveDocument when the document does not exist and SessionBusy
    while a rewrite is running for the document's current session.
    """
    with SESSIONS_LOCK:
        busy = _busy_session_for(project_name)
    if busy:
        raise SessionBusy(busy.id)

    content = read_document(project_name)
    headings = extract_headings(content)

    session = OutlineSession(
        id=str(uuid.uuid4())[:8],
        project=project_name,
        headings=headings,
        outline_text=serialize_outline(headings),
    )

    with SESSIONS_LOCK:
        # a rewrite may have started while the document was being read
        busy = _busy_session_for(project_name)
        if busy:
            raise SessionBusy(busy.id)
        stale = [sid for sid, s in OUTLINE_SESSIONS.items() if s.project == project_name]
        for sid in stale:
            del OUTLINE_SESSIONS[sid]
        OUTLINE_SESSIONS[session.id] = session

    log_event(logging.INFO, "outline_session_opened", session=session.id, project=project_name,
              headings=len(headings), replaced=len(stale))
    return session


def get_session(session_id: str) -> OutlineSession:
    with SESSIONS_LOCK:
        session = OUTLINE_SESSIONS.get(session_id)
    if session is None:
        raise SessionNotFound(session_id)
    return session


def close_session(session_id: str) -> Optional[OutlineSession]:
    """Drop the session; refused with SessionBusy while a rewrite is running."""
    with SESSIONS_LOCK:
        session = OUTLINE_SESSIONS.get(session_id)
        if session is not None:
            if session.is_processing:
                raise SessionBusy(session_id)
            del OUTLINE_SESSIONS[session_id]
    if session:
        log_event(logging.INFO, "outline_session_closed", session=session_id, project=session.project)
    return session


def update_outline_text(session_id: str, outline_text: str) -> OutlineSession:
    """Replace the editable buffer with what the user typed."""
    with SESSIONS_LOCK:
        session = OUTLINE_SESSIONS.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        if session.is_processing:
            raise SessionBusy(session_id)
        session.outline_text = outline_text
    log_event(logging.DEBUG, "outline_text_updated", session=session_id, chars=len(outline_text))
    return session


async def enhance_session(session_id: str, settings: Optional[OutlineEditorSettings] = None) -> OutlineSession:
    """
    Run the rewrite service over the session's outline.
    Single-flight per session; on failure the buffer is left as it was.
    """
    settings = settings or get_settings()
    if not settings.ai_enabled:
        raise AuthError("Please configure OpenRouter API key in settings")

    with SESSIONS_LOCK:
        session = OUTLINE_SESSIONS.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        if session.is_processing:
            raise SessionBusy(session_id)
        session.is_processing = True
        outline_text = session.outline_text

    try:
        enhanced = await rewrite_outline(outline_text, settings)
        with SESSIONS_LOCK:
            session.outline_text = enhanced
        log_event(logging.INFO, "outline_enhanced", session=session_id, project=session.project)
        return session
    finally:
        with SESSIONS_LOCK:
            session.is_processing = False


def apply_session(session_id: str, outline_text: Optional[str] = None) -> ReconcileResult:
    """Reconcile the edited outline into the document and close the session."""
    with SESSIONS_LOCK:
        session = OUTLINE_SESSIONS.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        if session.is_processing:
            raise SessionBusy(session_id)
        if outline_text is not None:
            session.outline_text = outline_text

    content = read_document(session.project)
    result = reconcile_outline(session.headings, session.outline_text, content)
    if result.changed:
        write_document(session.project, result.content)

    close_session(session_id)
    log_event(logging.INFO, "outline_applied", session=session_id, project=session.project, summary=result.message)
    return result
