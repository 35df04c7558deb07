from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .models import ChatHistory, ChatMessage
from .utils import read_json, write_json

logger = logging.getLogger(__name__)

MAX_MESSAGES = 20


def save_history(history: ChatHistory, path: Path) -> None:
    """
    Persist messages and the current dataset snapshot as JSON.

    Timestamps are written as ISO-8601 text.
    """
    write_json(path, history.model_dump(mode="json"))


def load_history(path: Path) -> Optional[ChatHistory]:
    """
    Load a saved history, turning ISO-8601 timestamps back into datetimes.

    Returns None if the file is missing or unreadable; a corrupt history file
    is not worth failing a session over.
    """
    if not path.exists():
        return None
    try:
        return ChatHistory.model_validate(read_json(path))
    except (OSError, ValueError, ValidationError) as e:
        logger.warning("Ignoring unreadable chat history %s: %s", path, e)
        return None


def add_message(
    messages: List[ChatMessage],
    message: ChatMessage,
    max_messages: int = MAX_MESSAGES,
) -> List[ChatMessage]:
    """Append `message`, keeping only the most recent `max_messages`."""
    updated = [*messages, message]
    if len(updated) > max_messages:
        return updated[len(updated) - max_messages:]
    return updated


def clear_history(path: Path) -> None:
    if path.exists():
        path.unlink()
