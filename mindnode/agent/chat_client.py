import json
import logging
import os
from typing import Any, Dict, List, Mapping, Optional

import requests

from ..errors import DiagramError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "accounts/fireworks/models/llama-v3p1-70b-instruct"
DEFAULT_URL = "https://api.fireworks.ai/inference/v1/chat/completions"


class TreeGenerationError(DiagramError):
    pass


def _resolve_api_key(explicit_key: Optional[str]) -> str:
    api_key = explicit_key or os.getenv("MINDNODE_API_KEY")
    if not api_key:
        raise TreeGenerationError(
            "API key is missing. Provide via `api_key` argument or MINDNODE_API_KEY env var."
        )
    return api_key


def chat_completion(
    messages: List[Mapping[str, Any]],
    *,
    model: Optional[str] = None,
    max_tokens: int = 2048,
    temperature: float = 0.3,
    json_mode: bool = True,
    api_key: Optional[str] = None,
    url: Optional[str] = None,
    timeout: float = 30.0,
) -> Dict[str, Any]:
    """POST to an OpenAI-compatible chat completions endpoint."""
    payload: Dict[str, Any] = {
        "model": model or os.getenv("MINDNODE_MODEL", DEFAULT_MODEL),
        "max_tokens": max_tokens,
        "temperature": temperature,
        "messages": list(messages),
    }
    if json_mode:
        payload["response_format"] = {"type": "json_object"}

    headers = {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Authorization": f"Bearer {_resolve_api_key(api_key)}",
    }

    endpoint = url or os.getenv("MINDNODE_API_URL", DEFAULT_URL)
    logger.debug("Requesting mind map tree from %s", endpoint)
    try:
        response = requests.post(endpoint, headers=headers, data=json.dumps(payload), timeout=timeout)
    except requests.RequestException as exc:
        raise TreeGenerationError(f"Chat completion request failed: {exc}") from exc

    if response.status_code >= 400:
        raise TreeGenerationError(
            f"Chat completion API error {response.status_code}: {response.text.strip() or 'no message'}"
        )

    try:
        return response.json()
    except ValueError as exc:
        raise TreeGenerationError(f"Failed to decode chat completion response: {exc}") from exc
