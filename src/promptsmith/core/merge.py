"""Combining two prompt configurations.

Field rules:
- capabilities, forbidden topics: union, base items first, exact-string dedup
- tools: concatenation; any name present in both raises DuplicateToolNameError
  before anything is changed
- constraints, examples: concatenation, base items first
- context: base and source joined by a blank line when both are set
- identity, tone, output format, error handling: base value kept if present
- guardrails: enabled if either side enables them
- format: never taken from the source
"""

from promptsmith.core.exceptions import DuplicateToolNameError
from promptsmith.core.model import PromptConfig


def _union(base: list[str], source: list[str]) -> list[str]:
    merged = list(base)
    for item in source:
        if item not in merged:
            merged.append(item)
    return merged


def _first_present(base: str | None, source: str | None) -> str | None:
    return base if base else source


def merge_prompt_configs(base: PromptConfig, source: PromptConfig) -> PromptConfig:
    """Merge ``source`` into ``base`` in place and return ``base``.

    Raises:
        DuplicateToolNameError: If a tool name appears in both configurations.
            ``base`` is not modified in that case.
    """
    base_names = {tool.name for tool in base.tools}
    for tool in source.tools:
        if tool.name in base_names:
            raise DuplicateToolNameError(
                f'Cannot merge: duplicate tool name "{tool.name}". '
                "Tools with the same name must be unique.",
                tool_name=tool.name,
            )

    base.tools.extend(source.tools)
    base.capabilities = _union(base.capabilities, source.capabilities)
    base.constraints.extend(source.constraints)
    base.examples.extend(source.examples)
    base.forbidden_topics = _union(base.forbidden_topics, source.forbidden_topics)

    if base.context and source.context:
        base.context = f"{base.context}\n\n{source.context}"
    else:
        base.context = _first_present(base.context, source.context)

    base.identity = _first_present(base.identity, source.identity)
    base.tone = _first_present(base.tone, source.tone)
    base.output_format = _first_present(base.output_format, source.output_format)
    base.error_handling = _first_present(base.error_handling, source.error_handling)
    base.guardrails_enabled = base.guardrails_enabled or source.guardrails_enabled

    return base
