import json
import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from ..diagram_components.tree import TreeNode
from ..errors import InvalidTreeError
from .chat_client import TreeGenerationError, chat_completion

logger = logging.getLogger(__name__)

Message = Mapping[str, Any]
ChatClient = Callable[..., Dict[str, Any]]


_SCHEMA_TEXT = '{"name": str, "children": optional list of objects with this same shape}'

SYSTEM_PROMPT = (
    "You are an assistant that organises knowledge into mind maps. "
    "Return ONLY JSON following this schema: "
    + _SCHEMA_TEXT
    + ". Keep every name short."
)


def _build_messages(topic: str, context: Sequence[str]) -> List[Message]:
    prompt = f"Build a mind map for the topic {topic!r}."
    if context:
        sources = "\n---\n".join(f"[{index}] {text.strip()}" for index, text in enumerate(context, 1))
        prompt += (
            "\n\nSources:\n"
            + sources
            + "\n\nUse only information from the sources. If they are incomplete, "
            "list only what is known; do not invent nodes."
        )
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


def _parse_tree(content: str, *, max_depth: int) -> TreeNode:
    content = content.strip()
    if not content:
        raise TreeGenerationError("LLM response is empty.")

    content = re.sub(r"```(?:json)?", "", content, flags=re.IGNORECASE).strip()

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        start = content.find("{")
        end = content.rfind("}")
        if start != -1 and end != -1 and end > start:
            try:
                data = json.loads(content[start : end + 1])
            except json.JSONDecodeError:
                raise TreeGenerationError(f"LLM response is not valid JSON: {exc}") from exc
        else:
            raise TreeGenerationError(f"LLM response is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise TreeGenerationError("LLM response JSON must be an object.")

    try:
        return TreeNode.from_dict(data, max_depth=max_depth)
    except InvalidTreeError as exc:
        raise TreeGenerationError(f"LLM returned a malformed tree: {exc}") from exc


def _message_content(response: Mapping[str, Any]) -> str:
    choices = response.get("choices")
    if not isinstance(choices, Iterable) or not choices:
        raise TreeGenerationError("Chat completion response missing choices.")

    first_choice = next(iter(choices))
    if not isinstance(first_choice, Mapping):
        raise TreeGenerationError("Invalid choice structure in chat completion response.")

    message = first_choice.get("message")
    if not isinstance(message, Mapping):
        raise TreeGenerationError("Chat completion choice missing message content.")

    content = message.get("content")
    if not isinstance(content, str):
        raise TreeGenerationError("Chat completion message content must be a string containing JSON.")
    return content


def generate_tree(
    topic: str,
    *,
    context: Sequence[str] = (),
    client: ChatClient = chat_completion,
    client_kwargs: Optional[Dict[str, Any]] = None,
    max_depth: int = 64,
) -> TreeNode:
    """Ask a chat model for a ``{name, children}`` tree about ``topic``.

    ``context`` holds source passages the model must stay within.
    """
    if not topic or not topic.strip():
        raise TreeGenerationError("topic must be a non-empty string.")

    response = client(_build_messages(topic, context), **(client_kwargs or {}))
    tree = _parse_tree(_message_content(response), max_depth=max_depth)
    logger.debug("Generated tree for %r with %d nodes", topic, sum(1 for _ in tree.walk()))
    return tree
