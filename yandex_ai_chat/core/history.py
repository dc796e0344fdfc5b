"""Prompt history persisted to a local JSON file."""

import asyncio
import json
from pathlib import Path
from typing import List

from pydantic import ValidationError as PydanticValidationError

from ..models.schemas import PromptEntry
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_ENTRIES = 500


class PromptHistory:
    """
    Stores submitted prompts, most recent first.

    Blank prompts are ignored and the list is capped at `max_entries`.
    A missing or corrupt file loads as an empty history. Concurrent
    orchestrations should record through `add_async`, which serializes
    writes.
    """

    def __init__(self, path: Path, max_entries: int = DEFAULT_MAX_ENTRIES):
        self.path = Path(path)
        self.max_entries = max_entries
        self._lock = asyncio.Lock()
        self._entries: List[PromptEntry] = self._load()

    @property
    def entries(self) -> List[PromptEntry]:
        return list(self._entries)

    def add(self, prompt: str) -> None:
        """Add a prompt to the front of the history and persist it."""
        if not prompt or not prompt.strip():
            return

        self._entries.insert(0, PromptEntry(prompt=prompt))
        del self._entries[self.max_entries:]
        self._save()

    async def add_async(self, prompt: str) -> None:
        """Serialized `add` with the file write kept off the event loop."""
        async with self._lock:
            await asyncio.to_thread(self.add, prompt)

    def search(self, keyword: str) -> List[PromptEntry]:
        """Case-insensitive substring search; a blank keyword returns everything."""
        if not keyword or not keyword.strip():
            return self.entries

        needle = keyword.casefold()
        return [entry for entry in self._entries if needle in entry.prompt.casefold()]

    def clear(self) -> None:
        self._entries.clear()
        self._save()

    def _load(self) -> List[PromptEntry]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            return [PromptEntry(**item) for item in raw][:self.max_entries]
        except (OSError, ValueError, TypeError, PydanticValidationError) as e:
            logger.warning(
                "Prompt history unreadable, starting fresh",
                extra={"path": str(self.path), "error": str(e)}
            )
            return []

    def _save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(
                    [entry.model_dump(mode="json") for entry in self._entries],
                    f,
                    ensure_ascii=False,
                    indent=2,
                )
        except OSError as e:
            logger.warning(
                "Failed to persist prompt history",
                extra={"path": str(self.path), "error": str(e)}
            )
