from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings, read from the environment.

    DIALOGIX_PREVIEW_ROWS: rows copied into DatasetDescriptor.preview (default 5)
    DIALOGIX_MAX_MESSAGES: chat history cap (default 20)
    DIALOGIX_HISTORY_PATH: history JSON file (default .dialogix/history.json)
    DIALOGIX_SCHEMA_POLICY: "first_row" | "union" (default first_row)
    DIALOGIX_LLM_MODEL: chat completion model for questions
    DIALOGIX_LOG_LEVEL: package log level (default WARNING)
    OPENAI_API_KEY / OPENAI_BASE_URL: question-answering service credentials
    """

    preview_rows: int = 5
    max_messages: int = 20
    history_path: Path = Path(".dialogix") / "history.json"
    schema_policy: str = "first_row"
    llm_model: str = "gpt-4o-mini"
    log_level: str = "WARNING"
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            preview_rows=_get_positive_int("DIALOGIX_PREVIEW_ROWS", 5),
            max_messages=_get_positive_int("DIALOGIX_MAX_MESSAGES", 20),
            history_path=Path(_get_str("DIALOGIX_HISTORY_PATH") or str(Path(".dialogix") / "history.json")),
            schema_policy=(_get_str("DIALOGIX_SCHEMA_POLICY") or "first_row").lower(),
            llm_model=_get_str("DIALOGIX_LLM_MODEL") or "gpt-4o-mini",
            log_level=(_get_str("DIALOGIX_LOG_LEVEL") or "WARNING").upper(),
            openai_api_key=_get_str("OPENAI_API_KEY"),
            openai_base_url=_get_str("OPENAI_BASE_URL"),
        )


def _get_str(name: str) -> Optional[str]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip()


def _get_positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        v = int(raw)
        return v if v > 0 else default
    except ValueError:
        return default
