"""
PromptSmith

Build structured system prompts for AI agents with a chainable API and render
them as markdown, compact markdown or the dense TOON encoding.
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Core imports
from promptsmith.core.builder import SystemPromptBuilder, create_prompt_builder
from promptsmith.core.config import PromptSmithConfig, load_config
from promptsmith.core.exceptions import (
    ConfigurationError,
    DuplicateToolNameError,
    PromptSmithException,
)

# Schema nodes
from promptsmith.core.schema import (
    ArraySchema,
    BooleanSchema,
    EnumSchema,
    NumberSchema,
    ObjectSchema,
    StringSchema,
    UnknownSchema,
)
from promptsmith.core.types import (
    CONSTRAINT_TYPES,
    Constraint,
    DialogueExample,
    IOExample,
    PromptFormat,
    Tool,
)
from promptsmith.core.validation import (
    PromptValidator,
    ValidationResult,
    ValidatorConfig,
    format_validation_result,
)

__all__ = [
    # Version
    "__version__",
    # Builder
    "SystemPromptBuilder",
    "create_prompt_builder",
    "PromptSmithConfig",
    "load_config",
    # Types
    "CONSTRAINT_TYPES",
    "Constraint",
    "DialogueExample",
    "IOExample",
    "PromptFormat",
    "Tool",
    # Schema
    "ArraySchema",
    "BooleanSchema",
    "EnumSchema",
    "NumberSchema",
    "ObjectSchema",
    "StringSchema",
    "UnknownSchema",
    # Validation
    "PromptValidator",
    "ValidationResult",
    "ValidatorConfig",
    "format_validation_result",
    # Exceptions
    "PromptSmithException",
    "DuplicateToolNameError",
    "ConfigurationError",
]
