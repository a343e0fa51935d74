from .chat_client import TreeGenerationError, chat_completion
from .generator import generate_tree

__all__ = [
    "generate_tree",
    "chat_completion",
    "TreeGenerationError",
]
