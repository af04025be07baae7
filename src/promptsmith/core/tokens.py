"""Token counting for rendered prompts."""

from typing import TYPE_CHECKING

import tiktoken

from promptsmith.core.types import PromptFormat

if TYPE_CHECKING:
    from promptsmith.core.builder import SystemPromptBuilder

DEFAULT_MODEL = "gpt-4o"


class TokenCounter:
    """Counts tokens using tiktoken."""

    def __init__(self) -> None:
        """Initialize token counter with encoding cache."""
        self._encoding_cache: dict[str, tiktoken.Encoding] = {}

    def _get_encoding(self, model: str) -> tiktoken.Encoding:
        """Get tiktoken encoding for model with caching."""
        if model not in self._encoding_cache:
            try:
                encoding = tiktoken.encoding_for_model(model)
            except KeyError:
                # Unknown models fall back to cl100k_base
                encoding = tiktoken.get_encoding("cl100k_base")
            self._encoding_cache[model] = encoding
        return self._encoding_cache[model]

    def count_text(self, text: str, model: str = DEFAULT_MODEL) -> int:
        """Count tokens in a text string.

        Args:
            text: Text to count tokens for
            model: Model name for encoding selection

        Returns:
            Number of tokens in the text
        """
        if not text:
            return 0

        encoding = self._get_encoding(model)
        return len(encoding.encode(text))

    def count_formats(
        self, builder: "SystemPromptBuilder", model: str = DEFAULT_MODEL
    ) -> dict[str, int]:
        """Count tokens of the same builder rendered in every format.

        Args:
            builder: Builder to render (its configured format is not changed)
            model: Model name for encoding selection

        Returns:
            Mapping of format name to token count
        """
        return {
            prompt_format.value: self.count_text(builder.build(prompt_format), model)
            for prompt_format in PromptFormat
        }
