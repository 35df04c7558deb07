from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from .ask import AskResult, answer_question
from .config import Settings
from .errors import DatasetError
from .history import add_message, clear_history, load_history, save_history
from .ingest import SchemaPolicy
from .models import ChatHistory, ChatMessage, PipelineResult
from .pipeline import process_file
from .utils import new_id

logger = logging.getLogger(__name__)

WELCOME = (
    "Welcome to Dialogix! Upload a CSV or Excel file to analyze your data, "
    "or ask me a question about data analysis."
)
NO_DATASET = (
    "Please upload a CSV or Excel file first so I can analyze your data "
    "and answer questions about it."
)


def _message(role: str, content: str) -> ChatMessage:
    return ChatMessage(id=new_id(), role=role, content=content)


def _append(history: ChatHistory, settings: Settings, *messages: ChatMessage) -> ChatHistory:
    msgs = list(history.messages)
    for m in messages:
        msgs = add_message(msgs, m, max_messages=settings.max_messages)
    return history.model_copy(update={"messages": msgs})


def current_history(settings: Settings) -> ChatHistory:
    return load_history(settings.history_path) or ChatHistory(messages=[_message("assistant", WELCOME)])


def record_upload(
    path: Path,
    *,
    settings: Settings,
    policy: Optional[SchemaPolicy] = None,
) -> Tuple[ChatHistory, PipelineResult]:
    """
    Process an uploaded file and make it the current dataset.

    The exchange is written to history either way. On FormatError/ParseError the
    previous current dataset is kept and the error is re-raised for the caller
    to present.
    """
    history = _append(current_history(settings), settings, _message("user", f"Uploaded file: {path.name}"))

    try:
        result = process_file(path, policy=policy, settings=settings)
    except DatasetError:
        history = _append(
            history,
            settings,
            _message(
                "assistant",
                f"Sorry, I encountered an error processing {path.name}. "
                "Please make sure it's a valid CSV or Excel file and try again.",
            ),
        )
        save_history(history, settings.history_path)
        raise

    d = result.descriptor
    history = _append(
        history,
        settings,
        _message(
            "assistant",
            f"File processed: {d.name} ({d.row_count} rows, {d.column_count} columns). "
            "Ask me questions about your data.",
        ),
    )
    history = history.model_copy(update={"current_dataset": d})
    save_history(history, settings.history_path)
    return history, result


def ask_current(question: str, *, settings: Settings) -> Tuple[ChatHistory, Optional[AskResult]]:
    """Answer a question about the current dataset; AskResult is None when there is none."""
    history = _append(current_history(settings), settings, _message("user", question))

    if history.current_dataset is None:
        history = _append(history, settings, _message("assistant", NO_DATASET))
        save_history(history, settings.history_path)
        return history, None

    result = answer_question(question, history.current_dataset, settings=settings)
    history = _append(history, settings, _message("assistant", result.answer))
    save_history(history, settings.history_path)
    return history, result


def reset_history(settings: Settings) -> ChatHistory:
    """Drop the stored history and current dataset, leaving a fresh transcript."""
    clear_history(settings.history_path)
    history = ChatHistory(
        messages=[
            _message("assistant", WELCOME),
            _message("system", "Chat history has been cleared."),
        ]
    )
    save_history(history, settings.history_path)
    logger.info("Cleared chat history at %s", settings.history_path)
    return history
