"""
Application state management.
Open outline editor sessions and the settings currently in effect.
"""

from threading import Lock
from typing import Dict

from config import load_settings
from models import OutlineSession

# --- STATE CONTAINERS ---

# Open outline editor sessions by session id
OUTLINE_SESSIONS: Dict[str, OutlineSession] = {}

# Lock for session table and single-flight flags
SESSIONS_LOCK: Lock = Lock()

# Settings loaded at startup; replaced (and persisted) on every change
SETTINGS = {"current": load_settings()}
