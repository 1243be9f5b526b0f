"""
Configuration, constants, and persisted editor settings.
"""

import os
import re
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, Dict

from dotenv import load_dotenv

# --- LOAD ENV ---
load_dotenv()

# --- LOGGING ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger("outline_loop")


def log_event(level: int, message: str, **data):
    """Lightweight structured logging helper."""
    try:
        serialized = " | ".join(f"{k}={v}" for k, v in data.items())
        logger.log(level, f"{message}{' | ' + serialized if serialized else ''}")
    except Exception:
        logger.log(level, message)


# --- PATHS ---
PROJECTS_DIR = Path(os.getenv("OUTLINE_PROJECTS_DIR", Path(__file__).parent / "projects"))
PROJECTS_DIR.mkdir(parents=True, exist_ok=True)
SETTINGS_FILE = Path(os.getenv("OUTLINE_SETTINGS_FILE", Path(__file__).parent / "settings.json"))

# --- CONSTANTS ---
DEFAULT_PROJECT_NAME = "Outline"
OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
CLIENT_REFERER = "https://github.com/outline-loop"
CLIENT_TITLE = "Outline Loop"
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "60"))

DEFAULT_MODEL = "anthropic/claude-3.5-sonnet"
DEFAULT_AI_PROMPT = (
    "Please improve this document outline by making the headings clearer, "
    "more consistent, and better organized. Maintain the same general structure "
    "but improve wording and hierarchy where needed."
)

RECOMMENDED_MODELS = [
    "anthropic/claude-3.5-sonnet",
    "anthropic/claude-3-opus",
    "openai/gpt-4-turbo",
    "openai/gpt-3.5-turbo",
]


# --- SETTINGS ---

@dataclass
class OutlineEditorSettings:
    """User-editable settings for the rewrite feature."""
    api_key: str = ""
    model: str = DEFAULT_MODEL
    ai_prompt: str = DEFAULT_AI_PROMPT

    # Persisted key -> attribute name
    FIELD_KEYS = {"apiKey": "api_key", "model": "model", "aiPrompt": "ai_prompt"}

    @property
    def ai_enabled(self) -> bool:
        return bool(self.api_key)

    def to_dict(self) -> Dict[str, str]:
        values = asdict(self)
        return {key: values[attr] for key, attr in self.FIELD_KEYS.items()}

    def to_public_dict(self) -> Dict[str, str]:
        """Settings safe to hand back to a client (key masked)."""
        data = self.to_dict()
        data["apiKey"] = mask_key(self.api_key) if self.api_key else ""
        data["aiEnabled"] = self.ai_enabled
        return data

    def apply(self, changes: Dict) -> "OutlineEditorSettings":
        """Return a copy with known persisted keys overridden; unknown keys are ignored."""
        values = asdict(self)
        for key, attr in self.FIELD_KEYS.items():
            if key in changes and changes[key] is not None:
                values[attr] = str(changes[key])
        return OutlineEditorSettings(**values)


def mask_key(key: str) -> str:
    """Mask an API key for safe logging: show first 8 and last 4 chars."""
    if len(key) <= 16:
        return "***"
    return f"{key[:8]}...{key[-4:]}"


def load_settings(path: Optional[Path] = None) -> OutlineEditorSettings:
    """Load persisted settings merged over the defaults."""
    path = path or SETTINGS_FILE
    settings = OutlineEditorSettings(api_key=os.getenv("OPENROUTER_API_KEY", ""))
    if not path.exists():
        log_event(logging.DEBUG, "settings_defaults", path=str(path))
        return settings

    try:
        stored = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log_event(logging.WARNING, "settings_load_failed", path=str(path), error=str(e))
        return settings

    if not isinstance(stored, dict):
        log_event(logging.WARNING, "settings_not_a_mapping", path=str(path))
        return settings

    settings = settings.apply(stored)
    log_event(logging.INFO, "settings_loaded", path=str(path), model=settings.model, ai_enabled=settings.ai_enabled)
    return settings


def save_settings(settings: OutlineEditorSettings, path: Optional[Path] = None) -> None:
    """Write the full settings mapping, replacing the previous file."""
    path = path or SETTINGS_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
    log_event(logging.INFO, "settings_saved", path=str(path), model=settings.model, ai_enabled=settings.ai_enabled)


# --- PROJECT HELPERS ---

def slugify_project(name: str) -> str:
    """Convert project name to URL-safe slug."""
    cleaned = name.strip().lower() if name else DEFAULT_PROJECT_NAME.lower()
    cleaned = re.sub(r"[^a-z0-9]+", "-", cleaned).strip("-")
    return cleaned or "default"


def resolve_project_name(value: Optional[str]) -> Optional[str]:
    """Resolve project name from input; None when nothing was given."""
    return value.strip() if value and value.strip() else None


def get_project_path(project_name: str) -> Path:
    """Get the file path for a project's document."""
    slug = slugify_project(project_name)
    return PROJECTS_DIR / f"{slug}.md"
