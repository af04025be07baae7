"""Render cache for built prompts.

Entries are stored per format but share a single dirty flag: every section is
used by every format, so any mutation invalidates all of them at once.
"""

from typing import Any

from promptsmith.core.types import PromptFormat


class PromptCache:
    """Memoizes rendered prompt text per format."""

    def __init__(self) -> None:
        """Initialize an empty, dirty cache."""
        self._cache: dict[PromptFormat, str] = {}
        self._is_dirty = True

    def invalidate(self) -> None:
        """Drop every cached entry and mark the cache dirty."""
        self._is_dirty = True
        self._cache = {}

    def clear(self) -> None:
        """Reset the cache (same effect as invalidate)."""
        self.invalidate()

    def is_dirty(self) -> bool:
        return self._is_dirty

    def get(self, prompt_format: PromptFormat | str) -> str | None:
        """Cached text for a format, or None when dirty or not cached."""
        if self._is_dirty:
            return None
        return self._cache.get(PromptFormat.parse(prompt_format))

    def set(self, prompt_format: PromptFormat | str, prompt: str) -> None:
        """Store rendered text and mark the cache clean."""
        self._cache[PromptFormat.parse(prompt_format)] = prompt
        self._is_dirty = False

    def get_stats(self) -> dict[str, Any]:
        """Cache statistics for debugging.

        Returns:
            Dictionary with dirty flag, cached format names and total cached characters
        """
        return {
            "is_dirty": self._is_dirty,
            "cached_formats": [f.value for f in self._cache],
            "cache_size": sum(len(text) for text in self._cache.values()),
        }
