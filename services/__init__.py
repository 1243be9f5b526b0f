"""Services package for Outline Loop."""

from services.markdown import (
    NoActiveDocument,
    extract_headings,
    read_document,
    write_document,
    list_documents,
)

from services.outline_format import (
    NEW_ID,
    parse_outline,
    serialize_outline,
    strip_ids,
)

from services.alignment import align_positionally

from services.ai import (
    RewriteError,
    AuthError,
    NetworkError,
    ServiceError,
    FormatError,
    rewrite_outline,
    strip_code_fences,
)

from services.reconciler import StaleOutline, reconcile_outline

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

__all__ = [
    # Markdown
    "NoActiveDocument",
    "extract_headings",
    "read_document",
    "write_document",
    "list_documents",
    # Outline format
    "NEW_ID",
    "parse_outline",
    "serialize_outline",
    "strip_ids",
    "align_positionally",
    # AI
    "RewriteError",
    "AuthError",
    "NetworkError",
    "ServiceError",
    "FormatError",
    "rewrite_outline",
    "strip_code_fences",
    # Reconciliation
    "StaleOutline",
    "reconcile_outline",
    # Processing
    "SessionNotFound",
    "SessionBusy",
    "open_session",
    "get_session",
    "close_session",
    "update_outline_text",
    "enhance_session",
    "apply_session",
    "get_settings",
    "update_settings",
]
