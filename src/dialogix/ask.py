from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from .config import Settings
from .models import DatasetDescriptor

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a data analysis expert assistant. "
    "Provide clear, concise answers with specific numbers and insights from the data."
)

FALLBACK_ANSWER = (
    "I apologize, but I encountered an error while analyzing the data. Please try again."
)
EMPTY_ANSWER = (
    "I apologize, but I was unable to analyze the data. "
    "Please try asking your question differently."
)


@dataclass(frozen=True)
class AskResult:
    answer: str
    generated_by: str  # "openai" | "fallback"
    context: dict[str, Any]


def build_qa_context(descriptor: DatasetDescriptor) -> dict[str, Any]:
    """
    Flat, JSON-compatible description of the dataset for the QA service.

    Only the preview rows are included, never the full row sequence.
    """
    dumped = descriptor.model_dump(mode="json")
    return {
        "file_name": dumped["name"],
        "row_count": dumped["row_count"],
        "column_count": dumped["column_count"],
        "columns": dumped["columns"],
        "summary": dumped["summary"],
        "sample_data": dumped["preview"],
    }


def build_prompt(question: str, context: dict[str, Any]) -> str:
    return (
        "You are a data analysis expert. Analyze this dataset:\n\n"
        f"File: {context['file_name']}\n"
        f"Rows: {context['row_count']}\n"
        f"Columns: {', '.join(context['columns'])}\n\n"
        "Sample Data:\n"
        f"{json.dumps(context['sample_data'], indent=2, allow_nan=False)}\n\n"
        "Statistical Summary:\n"
        f"{json.dumps(context['summary'], indent=2, allow_nan=False)}\n\n"
        f"User Question: {question}\n\n"
        "Provide a detailed, accurate answer based on the data provided. "
        "Include specific numbers and insights where relevant."
    )


def _try_openai_answer(prompt: str, settings: Settings) -> Optional[str]:
    """Returns the completion text, "" for an empty completion, None when unavailable."""
    if not settings.openai_api_key:
        logger.info("OPENAI_API_KEY not set; using fallback answer")
        return None
    try:
        from openai import OpenAI

        client = OpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
        resp = client.chat.completions.create(
            model=settings.llm_model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=0.9,
            max_tokens=1000,
        )
        if not resp.choices:
            return ""
        return resp.choices[0].message.content or ""
    except Exception as e:  # noqa: BLE001 - the service must never break the caller
        logger.warning("Question-answering request failed: %s: %s", type(e).__name__, e)
        return None


def answer_question(
    question: str,
    descriptor: DatasetDescriptor,
    *,
    settings: Optional[Settings] = None,
) -> AskResult:
    """
    Ask the QA service about the dataset and pass its text through untouched.

    Missing credentials or a failed request give FALLBACK_ANSWER; an empty
    completion gives EMPTY_ANSWER.
    """
    settings = settings or Settings.from_env()
    context = build_qa_context(descriptor)
    text = _try_openai_answer(build_prompt(question, context), settings)

    if text is None:
        return AskResult(answer=FALLBACK_ANSWER, generated_by="fallback", context=context)
    if not text.strip():
        return AskResult(answer=EMPTY_ANSWER, generated_by="fallback", context=context)
    return AskResult(answer=text, generated_by="openai", context=context)
