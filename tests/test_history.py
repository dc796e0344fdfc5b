"""Tests for persisted prompt history."""

import asyncio
import json
import threading
from datetime import datetime, timedelta, timezone

import pytest

from yandex_ai_chat.core.history import PromptHistory


@pytest.fixture
def history_path(tmp_path):
    return tmp_path / "history" / "prompt_history.json"


@pytest.fixture
def history(history_path):
    return PromptHistory(history_path)


class TestPromptHistory:

    def test_add_single_prompt(self, history):
        history.add("Generate a REST API")

        assert [e.prompt for e in history.entries] == ["Generate a REST API"]

    def test_blank_prompts_ignored(self, history):
        history.add("")
        history.add("   ")

        assert history.entries == []

    def test_add_sets_timestamp(self, history):
        before = datetime.now(timezone.utc) - timedelta(seconds=1)
        history.add("Test prompt")
        after = datetime.now(timezone.utc) + timedelta(seconds=1)

        assert before <= history.entries[0].timestamp <= after

    def test_most_recent_first(self, history):
        history.add("First")
        history.add("Second")

        assert [e.prompt for e in history.entries] == ["Second", "First"]

    def test_capped_at_max_entries(self, history_path):
        history = PromptHistory(history_path, max_entries=3)
        for i in range(5):
            history.add(f"prompt {i}")

        assert [e.prompt for e in history.entries] == ["prompt 4", "prompt 3", "prompt 2"]

    def test_clear(self, history, history_path):
        history.add("Something")
        history.clear()

        assert history.entries == []
        assert json.loads(history_path.read_text(encoding="utf-8")) == []

    def test_search_is_case_insensitive(self, history):
        history.add("Generate REST API for users")
        history.add("Refactor authentication code")
        history.add("generate unit tests")

        results = history.search("GENERATE")

        assert [e.prompt for e in results] == ["generate unit tests", "Generate REST API for users"]

    def test_blank_search_returns_everything(self, history):
        for prompt in ("A", "B", "C"):
            history.add(prompt)

        assert len(history.search("")) == 3
        assert len(history.search("  ")) == 3

    def test_search_without_match(self, history):
        history.add("Hello world")

        assert history.search("nonexistent_xyz") == []

    def test_persists_across_instances(self, history, history_path):
        history.add("Сгенерируй парсер дат")

        reloaded = PromptHistory(history_path)

        assert [e.prompt for e in reloaded.entries] == ["Сгенерируй парсер дат"]

    def test_corrupt_file_loads_empty(self, history_path):
        history_path.parent.mkdir(parents=True)
        history_path.write_text("{not json", encoding="utf-8")

        assert PromptHistory(history_path).entries == []

    @pytest.mark.asyncio
    async def test_concurrent_adds_all_recorded(self, history):
        await asyncio.gather(*(history.add_async(f"p{i}") for i in range(20)))

        assert len(history.entries) == 20

    @pytest.mark.asyncio
    async def test_async_add_writes_off_the_event_loop(self, history, monkeypatch):
        loop_thread = threading.get_ident()
        write_threads = []
        original_save = history._save

        def recording_save():
            write_threads.append(threading.get_ident())
            original_save()

        monkeypatch.setattr(history, "_save", recording_save)

        await history.add_async("Generate a parser")

        assert [e.prompt for e in history.entries] == ["Generate a parser"]
        assert write_threads and loop_thread not in write_threads
