"""Pre-configured builders for common agent roles.

Each template returns a fresh SystemPromptBuilder that can be customized
further or merged with other builders::

    from promptsmith.templates import customer_service, security

    builder = customer_service(company_name="TechStore").merge(security())

Role templates (coding_assistant, customer_service, data_analyst,
research_assistant) set an identity; rule templates (accessibility,
multilingual, security) do not and are meant to be merged.
"""

from promptsmith.templates.accessibility import accessibility
from promptsmith.templates.coding_assistant import coding_assistant
from promptsmith.templates.customer_service import customer_service
from promptsmith.templates.data_analyst import data_analyst
from promptsmith.templates.multilingual import multilingual
from promptsmith.templates.research_assistant import research_assistant
from promptsmith.templates.security import security

__all__ = [
    "accessibility",
    "coding_assistant",
    "customer_service",
    "data_analyst",
    "multilingual",
    "research_assistant",
    "security",
]
