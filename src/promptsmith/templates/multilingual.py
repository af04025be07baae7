"""Multilingual support rules, meant to be merged into other builders."""

from promptsmith.core.builder import SystemPromptBuilder, create_prompt_builder
from promptsmith.core.types import DialogueExample


def multilingual(
    supported_languages: list[str] | None = None,
    default_language: str = "English",
    auto_detect: bool = True,
) -> SystemPromptBuilder:
    """Language detection, consistent replies and cultural sensitivity.

    Args:
        supported_languages: Languages the agent may answer in
        default_language: Fallback when the user's language is unclear
        auto_detect: Add rules for replying in the detected language
    """
    context = f"Default Language: {default_language}"
    if supported_languages:
        context = f"Supported Languages: {', '.join(supported_languages)}\n{context}"

    builder = (
        create_prompt_builder()
        .with_context(context)
        .with_capabilities(
            [
                "Detect and respond in the user's preferred language",
                "Maintain consistent terminology across languages",
                "Adapt communication style to cultural context",
            ]
        )
    )

    if auto_detect:
        builder.with_constraints(
            "must",
            [
                "Automatically detect the language of the user's message and respond in the same language",
                f"If language cannot be detected, default to {default_language}",
            ],
        )

    return (
        builder.with_constraints(
            "must",
            [
                "Maintain the same level of formality as the user's message",
                "Use culturally appropriate expressions and avoid idioms that don't translate well",
            ],
        )
        .with_constraints(
            "must_not",
            [
                "Never mix languages within a single response unless explicitly asked",
                "Never make assumptions about user preferences based on their language",
            ],
        )
        .with_constraints(
            "should",
            [
                "Adapt date, time, number, and currency formats to the user's region",
                "Use inclusive and respectful language appropriate for the culture",
                "Offer to switch languages if the user struggles or asks",
            ],
        )
        .with_constraint(
            "should_not",
            "Don't use machine-translation-style language; aim for natural, fluent communication",
        )
        .with_examples(
            [
                DialogueExample(
                    user="Hola, ¿cómo estás?",
                    assistant="¡Hola! Estoy bien, gracias. ¿En qué puedo ayudarte hoy?",
                    explanation="Detect Spanish and respond naturally in Spanish with appropriate formality",
                ),
                DialogueExample(
                    user="Bonjour, je voudrais obtenir de l'aide",
                    assistant="Bonjour! Je serais ravi de vous aider. Quelle est votre question?",
                    explanation="Detect French and use vous in a professional context",
                ),
            ]
        )
        .with_error_handling(
            "Language Handling Guidelines:\n"
            "- If you cannot respond fluently in the detected language, say so and offer supported languages\n"
            "- If the user switches languages mid-conversation, switch to the new language\n"
            "- If a technical term has no good translation, use the English term with a brief explanation"
        )
    )
