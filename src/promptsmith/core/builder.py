"""Fluent builder for agent system prompts.

Every ``with_*`` method mutates the builder in place, invalidates the render
cache and returns the same builder so calls can be chained::

    prompt = (
        create_prompt_builder()
        .with_identity("You are a helpful coding assistant")
        .with_capabilities(["Explain code", "Debug issues"])
        .with_constraint("must", "Always provide working code examples")
        .build()
    )

Blank strings and blank list entries are dropped silently.
"""

import json
from collections.abc import Iterable, Mapping
from typing import Any

from rich.console import Console
from rich.table import Table

from promptsmith.core.cache import PromptCache
from promptsmith.core.config import PromptSmithConfig
from promptsmith.core.exceptions import DuplicateToolNameError, format_error_for_log
from promptsmith.core.logger import PromptSmithLogger
from promptsmith.core.merge import merge_prompt_configs
from promptsmith.core.model import PromptConfig
from promptsmith.core.renderers import render_prompt
from promptsmith.core.tokens import TokenCounter
from promptsmith.core.types import (
    Constraint,
    ConstraintType,
    Example,
    PromptFormat,
    Tool,
    example_from_dict,
)
from promptsmith.core.validation import PromptValidator, ValidationResult, ValidatorConfig

logger = PromptSmithLogger()

ToolLike = Tool | Mapping[str, Any]
ExampleLike = Example | Mapping[str, Any]


def _clean(text: str | None) -> str | None:
    """Return text unless it is None or whitespace-only."""
    if text is None or not str(text).strip():
        return None
    return text


class SystemPromptBuilder:
    """Builds system prompts from declared sections.

    Owns its PromptConfig and the render cache for it. Not thread-safe: use
    one builder per logical request, and ``extend()`` or ``derive_child()`` to
    get an independent copy.
    """

    def __init__(self, config: PromptSmithConfig | None = None) -> None:
        """Initialize an empty builder.

        Args:
            config: Optional defaults (format, validator switches)
        """
        self._config = PromptConfig()
        self._cache = PromptCache()
        self._validator_config = ValidatorConfig()
        if config is not None:
            self._config.format = config.prompt_format
            self._validator_config = config.validator_config

    def _changed(self) -> "SystemPromptBuilder":
        self._cache.invalidate()
        return self

    # ------------------------------------------------------------------
    # Section setters
    # ------------------------------------------------------------------

    def with_identity(self, text: str) -> "SystemPromptBuilder":
        """Set who the agent is. Replaces any previous identity."""
        if _clean(text) is None:
            return self
        self._config.identity = text
        return self._changed()

    def with_context(self, text: str | None) -> "SystemPromptBuilder":
        """Set background context. Replaces any previous context."""
        if _clean(text) is None:
            return self
        self._config.context = text
        return self._changed()

    def with_capability(self, capability: str) -> "SystemPromptBuilder":
        """Append one capability."""
        if _clean(capability) is None:
            return self
        self._config.capabilities.append(capability)
        return self._changed()

    def with_capabilities(self, capabilities: str | Iterable[str]) -> "SystemPromptBuilder":
        """Append several capabilities, skipping blank entries.

        A plain string is treated as a single capability.
        """
        if isinstance(capabilities, str):
            return self.with_capability(capabilities)
        kept = [c for c in capabilities if _clean(c) is not None]
        if not kept:
            return self
        self._config.capabilities.extend(kept)
        return self._changed()

    def with_tool(self, tool: ToolLike) -> "SystemPromptBuilder":
        """Register a tool for documentation in the prompt.

        Args:
            tool: Tool instance or mapping with name, description, schema and
                optional execute keys

        Tool names are not checked for uniqueness here; ``validate()`` and
        ``merge()`` report duplicates.
        """
        if not isinstance(tool, Tool):
            tool = Tool.from_dict(tool)
        self._config.tools.append(tool)
        return self._changed()

    def with_tools(self, tools: Iterable[ToolLike]) -> "SystemPromptBuilder":
        """Register several tools."""
        converted = [t if isinstance(t, Tool) else Tool.from_dict(t) for t in tools]
        if not converted:
            return self
        self._config.tools.extend(converted)
        return self._changed()

    def with_constraint(self, constraint_type: ConstraintType, rule: str) -> "SystemPromptBuilder":
        """Add a behavioral rule to one of the must/must_not/should/should_not buckets.

        Raises:
            ValueError: If constraint_type is not a known bucket
        """
        constraint = Constraint(constraint_type, rule)
        if _clean(rule) is None:
            return self
        self._config.constraints.append(constraint)
        return self._changed()

    def with_constraints(
        self, constraint_type: ConstraintType, rules: str | Iterable[str]
    ) -> "SystemPromptBuilder":
        """Add one rule or a list of rules to the same bucket."""
        if isinstance(rules, str):
            return self.with_constraint(constraint_type, rules)
        kept = [Constraint(constraint_type, r) for r in rules if _clean(r) is not None]
        if not kept:
            return self
        self._config.constraints.extend(kept)
        return self._changed()

    def with_examples(self, examples: Iterable[ExampleLike]) -> "SystemPromptBuilder":
        """Append examples; examples with both sides blank are dropped.

        Args:
            examples: DialogueExample/IOExample instances or mappings with
                user/assistant or input/output keys (plus optional explanation)
        """
        converted = [ex if not isinstance(ex, Mapping) else example_from_dict(ex) for ex in examples]
        kept = [ex for ex in converted if not ex.is_empty()]
        if not kept:
            return self
        self._config.examples.extend(kept)
        return self._changed()

    def with_error_handling(self, instructions: str) -> "SystemPromptBuilder":
        """Set instructions for handling errors and uncertainty."""
        if _clean(instructions) is None:
            return self
        self._config.error_handling = instructions
        return self._changed()

    def with_guardrails(self) -> "SystemPromptBuilder":
        """Enable the built-in prompt-injection guardrails section."""
        if self._config.guardrails_enabled:
            return self
        self._config.guardrails_enabled = True
        return self._changed()

    def with_forbidden_topics(self, topics: str | Iterable[str]) -> "SystemPromptBuilder":
        """Add topics the agent must decline; duplicates are ignored.

        A plain string is treated as a single topic.
        """
        if isinstance(topics, str):
            topics = [topics]
        added = False
        for topic in topics:
            if _clean(topic) is None or topic in self._config.forbidden_topics:
                continue
            self._config.forbidden_topics.append(topic)
            added = True
        return self._changed() if added else self

    def with_tone(self, tone: str) -> "SystemPromptBuilder":
        """Set the communication style."""
        if _clean(tone) is None:
            return self
        self._config.tone = tone
        return self._changed()

    def with_output(self, output_format: str) -> "SystemPromptBuilder":
        """Set the expected response structure."""
        if _clean(output_format) is None:
            return self
        self._config.output_format = output_format
        return self._changed()

    def with_format(self, prompt_format: PromptFormat | str) -> "SystemPromptBuilder":
        """Set the default render format (markdown, toon or compact).

        Raises:
            ConfigurationError: If the format name is unknown
        """
        self._config.format = PromptFormat.parse(prompt_format)
        return self._changed()

    # ------------------------------------------------------------------
    # Conditional setters
    # ------------------------------------------------------------------

    def with_capability_if(self, condition: bool, capability: str) -> "SystemPromptBuilder":
        """Append a capability only when condition is true."""
        return self.with_capability(capability) if condition else self

    def with_tool_if(self, condition: bool, tool: ToolLike) -> "SystemPromptBuilder":
        """Register a tool only when condition is true."""
        return self.with_tool(tool) if condition else self

    def with_constraint_if(
        self, condition: bool, constraint_type: ConstraintType, rule: str
    ) -> "SystemPromptBuilder":
        """Add a constraint only when condition is true."""
        return self.with_constraint(constraint_type, rule) if condition else self

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_identity(self) -> bool:
        return bool(self._config.identity)

    def has_context(self) -> bool:
        return bool(self._config.context)

    def has_capabilities(self) -> bool:
        return bool(self._config.capabilities)

    def has_tools(self) -> bool:
        return bool(self._config.tools)

    def has_constraints(self) -> bool:
        return bool(self._config.constraints)

    def has_examples(self) -> bool:
        return bool(self._config.examples)

    def has_guardrails(self) -> bool:
        return self._config.guardrails_enabled

    def has_forbidden_topics(self) -> bool:
        return bool(self._config.forbidden_topics)

    def has_error_handling(self) -> bool:
        return bool(self._config.error_handling)

    def has_tone(self) -> bool:
        return bool(self._config.tone)

    def has_output_format(self) -> bool:
        return bool(self._config.output_format)

    def get_constraints_by_type(self, constraint_type: ConstraintType) -> list[Constraint]:
        """Constraints of one bucket, in insertion order."""
        return self._config.constraints_of(constraint_type)

    def get_tools(self) -> list[Tool]:
        """Registered tools (a copy of the list)."""
        return list(self._config.tools)

    def get_format(self) -> PromptFormat:
        return self._config.format

    def get_summary(self) -> dict[str, Any]:
        """Counts per section and per constraint bucket, plus the active format."""
        return self._config.summary()

    def get_cache_stats(self) -> dict[str, Any]:
        """Render cache statistics (dirty flag, cached formats, cached size)."""
        return self._cache.get_stats()

    # ------------------------------------------------------------------
    # Rendering and export
    # ------------------------------------------------------------------

    def build(self, prompt_format: PromptFormat | str | None = None) -> str:
        """Render the prompt.

        Args:
            prompt_format: Format override; defaults to the configured format

        Returns:
            Prompt text, or "" when nothing has been declared
        """
        resolved = PromptFormat.parse(prompt_format) if prompt_format else self._config.format

        cached = self._cache.get(resolved)
        if cached is not None:
            logger.debug("prompt_cache_hit", format=resolved.value)
            return cached

        with logger.operation("prompt_render", format=resolved.value):
            prompt = render_prompt(self._config, resolved)
        self._cache.set(resolved, prompt)
        return prompt

    render = build

    def to_dict(self) -> dict[str, Any]:
        """Export every section as plain data (always current, never cached)."""
        return self._config.to_dict()

    def to_json(self, indent: int | None = 2) -> str:
        """Export ``to_dict()`` as a JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def to_runtime_tools(self) -> dict[str, dict[str, Any]]:
        """Tools keyed by name for agent runtimes.

        Each entry holds the description, the schema object exactly as it was
        supplied and the execute handler (or None).
        """
        runtime_tools: dict[str, dict[str, Any]] = {}
        for tool in self._config.tools:
            if tool.name in runtime_tools:
                # Later tools replace earlier ones with the same name
                logger.warn("runtime_tool_name_collision", tool_name=tool.name)
            runtime_tools[tool.name] = {
                "description": tool.description,
                "parameters": tool.schema,
                "execute": tool.execute,
            }
        return runtime_tools

    def to_runtime_config(self) -> dict[str, Any]:
        """Prompt text and tools in one mapping: ``{"text": ..., "tools": ...}``.

        ``text`` is identical to ``build()``.
        """
        return {"text": self.build(), "tools": self.to_runtime_tools()}

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def extend(self) -> "SystemPromptBuilder":
        """Independent copy of this builder (all sections and the format)."""
        child = SystemPromptBuilder()
        child._config = self._config.copy()
        child._validator_config = self._validator_config
        return child

    def derive_child(self) -> "SystemPromptBuilder":
        """New builder with this builder's format and otherwise empty sections."""
        child = SystemPromptBuilder()
        child._config.format = self._config.format
        child._validator_config = self._validator_config
        return child

    def merge(self, source: "SystemPromptBuilder") -> "SystemPromptBuilder":
        """Merge another builder's sections into this one.

        Raises:
            DuplicateToolNameError: If both builders declare a tool with the same
                name; this builder is left unchanged
        """
        try:
            merge_prompt_configs(self._config, source._config)
        except DuplicateToolNameError as e:
            logger.warn("prompt_merge_conflict", error=format_error_for_log(e))
            raise
        logger.info(
            "prompt_merged",
            tools=len(self._config.tools),
            capabilities=len(self._config.capabilities),
        )
        return self._changed()

    # ------------------------------------------------------------------
    # Validation and debugging
    # ------------------------------------------------------------------

    def with_validator_config(
        self, config: ValidatorConfig | Mapping[str, Any]
    ) -> "SystemPromptBuilder":
        """Set default validator switches used by ``validate()``."""
        self._validator_config = self._validator_config.with_overrides(config)
        return self

    def validate(
        self, overrides: ValidatorConfig | Mapping[str, Any] | None = None
    ) -> ValidationResult:
        """Check the configuration for problems.

        Args:
            overrides: Switches layered over the builder's validator config for
                this call only

        Returns:
            ValidationResult (never raises for findings)
        """
        validator = PromptValidator(self._validator_config.with_overrides(overrides))
        logger.start_timer("prompt_validate")
        result = validator.validate(self._config)
        logger.end_timer(
            "prompt_validate",
            valid=result.valid,
            errors=len(result.errors),
            warnings=len(result.warnings),
            info=len(result.info),
        )
        return result

    def debug(
        self,
        console: Console | None = None,
        show_tokens: bool = False,
        model: str | None = None,
    ) -> "SystemPromptBuilder":
        """Print the builder state as a table.

        Args:
            console: rich Console to print to (default: stdout)
            show_tokens: Also print token counts for each format
            model: Model name used for token counting

        Returns:
            This builder, for chaining
        """
        console = console or Console()
        summary = self.get_summary()
        stats = self.get_cache_stats()

        table = Table(title="PromptSmith builder", show_header=True)
        table.add_column("Section", style="cyan")
        table.add_column("Value", style="white")
        for key, value in summary.items():
            if key == "constraints_by_type":
                value = ", ".join(f"{k}={v}" for k, v in value.items())
            table.add_row(key, str(value))
        table.add_row("cache_dirty", str(stats["is_dirty"]))
        table.add_row("cached_formats", ", ".join(stats["cached_formats"]) or "-")
        table.add_row("cache_size", str(stats["cache_size"]))

        if show_tokens:
            counter = TokenCounter()
            counts = counter.count_formats(self, model) if model else counter.count_formats(self)
            for name, count in counts.items():
                table.add_row(f"tokens_{name}", str(count))

        console.print(table)
        logger.debug("prompt_debug", **summary)
        return self


def create_prompt_builder(config: PromptSmithConfig | None = None) -> SystemPromptBuilder:
    """Create a new, independent prompt builder.

    Args:
        config: Optional defaults; without one the format is markdown
    """
    return SystemPromptBuilder(config)
