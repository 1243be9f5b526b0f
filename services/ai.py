"""
AI operations: outline rewriting through OpenRouter chat completions.
"""

import re
import logging
from typing import Optional

import httpx

from config import (
    log_event,
    mask_key,
    OutlineEditorSettings,
    OPENROUTER_URL,
    CLIENT_REFERER,
    CLIENT_TITLE,
    LLM_TIMEOUT,
)
from services.alignment import Aligner, align_positionally
from services.outline_format import non_blank_lines, strip_ids

MARKDOWN_FENCE = re.compile(r'```markdown\n?')
PLAIN_FENCE = re.compile(r'```\n?')

RETURN_INSTRUCTION = (
    "Please return ONLY the improved outline in the same markdown heading format "
    "(using # for headings). Do not include any explanations or additional text."
)


# --- ERRORS ---

class RewriteError(Exception):
    """Base error for a failed outline rewrite."""


class AuthError(RewriteError):
    """No API key configured."""


class NetworkError(RewriteError):
    """Transport failure talking to the text-generation service."""


class ServiceError(RewriteError):
    """Non-success HTTP response from the text-generation service."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FormatError(RewriteError):
    """Response did not carry the expected message content."""


# --- PROMPT & CLEANUP ---

def build_prompt(ai_prompt: str, bare_outline: str) -> str:
    return f"{ai_prompt}\n\nCurrent outline:\n{bare_outline}\n\n{RETURN_INSTRUCTION}"


def strip_code_fences(text: str) -> str:
    """Remove ```markdown / ``` fences wherever they occur and trim."""
    return PLAIN_FENCE.sub('', MARKDOWN_FENCE.sub('', text)).strip()


# --- SERVICE CALL ---

async def request_completion(prompt: str, settings: OutlineEditorSettings) -> str:
    """Send one user message and return the first choice's content."""
    if not settings.api_key:
        raise AuthError("Please configure OpenRouter API key in settings")

    headers = {
        "Authorization": f"Bearer {settings.api_key}",
        "Content-Type": "application/json",
        "HTTP-Referer": CLIENT_REFERER,
        "X-Title": CLIENT_TITLE,
    }
    body = {
        "model": settings.model,
        "messages": [
            {"role": "user", "content": prompt},
        ],
    }

    log_event(logging.INFO, "rewrite_request", model=settings.model, key=mask_key(settings.api_key), prompt_chars=len(prompt))

    try:
        async with httpx.AsyncClient(timeout=LLM_TIMEOUT) as client:
            response = await client.post(OPENROUTER_URL, headers=headers, json=body)
    except httpx.TimeoutException as e:
        log_event(logging.ERROR, "rewrite_timeout", timeout=LLM_TIMEOUT)
        raise NetworkError(f"Request timed out after {LLM_TIMEOUT:g}s") from e
    except httpx.HTTPError as e:
        log_event(logging.ERROR, "rewrite_transport_error", error=str(e))
        raise NetworkError(str(e) or e.__class__.__name__) from e

    if not response.is_success:
        log_event(logging.ERROR, "rewrite_http_error", status=response.status_code)
        raise ServiceError(
            f"Request failed, status {response.status_code}: {response.text[:200]}",
            status_code=response.status_code,
        )

    try:
        data = response.json()
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        log_event(logging.ERROR, "rewrite_bad_response", error=repr(e))
        raise FormatError("Unexpected response from the AI service") from e

    if not isinstance(content, str):
        raise FormatError("Unexpected response from the AI service")

    log_event(logging.INFO, "rewrite_response", chars=len(content))
    return content


async def rewrite_outline(
    outline_text: str,
    settings: OutlineEditorSettings,
    aligner: Aligner = align_positionally,
) -> str:
    """
    Ask the service for an improved outline and return it in the editable
    format, ids re-attached by the aligner.
    """
    prompt = build_prompt(settings.ai_prompt, strip_ids(outline_text))
    reply = await request_completion(prompt, settings)
    enhanced = strip_code_fences(reply.strip())

    enhanced_lines = non_blank_lines(enhanced)
    original_lines = non_blank_lines(outline_text)
    aligned = aligner(original_lines, enhanced_lines)

    log_event(
        logging.INFO,
        "outline_rewritten",
        original=len(original_lines),
        enhanced=len(enhanced_lines),
        added=max(len(enhanced_lines) - len(original_lines), 0),
    )
    return '\n'.join(aligned)
