"""Unit tests for the render cache."""

from promptsmith.core.cache import PromptCache
from promptsmith.core.types import PromptFormat


class TestPromptCache:
    """Test PromptCache behavior."""

    def setup_method(self):
        """Set up test fixtures."""
        self.cache = PromptCache()

    def test_starts_dirty(self):
        assert self.cache.is_dirty() is True
        assert self.cache.get(PromptFormat.MARKDOWN) is None

    def test_set_and_get(self):
        self.cache.set(PromptFormat.MARKDOWN, "# Identity\nAgent")

        assert self.cache.is_dirty() is False
        assert self.cache.get(PromptFormat.MARKDOWN) == "# Identity\nAgent"
        assert self.cache.get("markdown") == "# Identity\nAgent"
        assert self.cache.get(PromptFormat.TOON) is None

    def test_invalidate_drops_all_formats(self):
        self.cache.set(PromptFormat.MARKDOWN, "a")
        self.cache.set(PromptFormat.TOON, "b")

        self.cache.invalidate()

        assert self.cache.is_dirty() is True
        assert self.cache.get(PromptFormat.MARKDOWN) is None
        assert self.cache.get_stats()["cached_formats"] == []

    def test_clear(self):
        self.cache.set(PromptFormat.COMPACT, "abc")
        self.cache.clear()
        assert self.cache.get_stats() == {"is_dirty": True, "cached_formats": [], "cache_size": 0}

    def test_stats(self):
        self.cache.set(PromptFormat.MARKDOWN, "abcd")
        self.cache.set(PromptFormat.TOON, "ab")

        stats = self.cache.get_stats()

        assert stats["is_dirty"] is False
        assert stats["cached_formats"] == ["markdown", "toon"]
        assert stats["cache_size"] == 6
