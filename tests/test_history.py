from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from dialogix.history import add_message, clear_history, load_history, save_history
from dialogix.models import ChatHistory, ChatMessage
from dialogix.pipeline import process_upload
from dialogix.utils import read_json


def _msg(i: int) -> ChatMessage:
    return ChatMessage(
        id=f"m{i}",
        role="user",
        content=f"message {i}",
        timestamp=datetime(2024, 5, 1, 12, 0, i, tzinfo=timezone.utc),
    )


def test_history_round_trips_timestamps_and_dataset(tmp_path: Path) -> None:
    path = tmp_path / "history.json"
    descriptor = process_upload("d.csv", b"city,n\nNY,1\nLA,2\n").descriptor
    history = ChatHistory(messages=[_msg(1), _msg(2)], current_dataset=descriptor)

    save_history(history, path)

    raw = read_json(path)
    assert isinstance(raw["messages"][0]["timestamp"], str)
    assert raw["messages"][0]["timestamp"].startswith("2024-05-01T12:00:01")

    loaded = load_history(path)
    assert loaded == history
    assert isinstance(loaded.messages[0].timestamp, datetime)
    assert loaded.current_dataset.summary["n"].kind == "numeric"


def test_add_message_keeps_most_recent() -> None:
    msgs: list[ChatMessage] = []
    for i in range(25):
        msgs = add_message(msgs, _msg(i % 60), max_messages=20)

    assert len(msgs) == 20
    assert msgs[0].id == "m5"
    assert msgs[-1].id == "m24"


def test_load_missing_or_corrupt_history(tmp_path: Path) -> None:
    path = tmp_path / "history.json"
    assert load_history(path) is None

    path.write_text("{not json", encoding="utf-8")
    assert load_history(path) is None


def test_clear_history(tmp_path: Path) -> None:
    path = tmp_path / "history.json"
    save_history(ChatHistory(messages=[_msg(1)]), path)

    clear_history(path)
    assert not path.exists()
    clear_history(path)


def test_new_message_timestamp_defaults_to_aware_utc() -> None:
    message = ChatMessage(id="m", role="system", content="hi")
    assert message.timestamp.tzinfo is not None
    assert message.timestamp.utcoffset() == timezone.utc.utcoffset(None)
