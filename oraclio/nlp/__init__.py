"""Automation intent recognition and workflow synthesis."""

from .intent import IntentExtractor, IntentRule, INTENT_RULES, ENTITY_BUILDERS, intent_extractor
from .workflow import (
    WorkflowSynthesizer,
    suggest_improvements,
    local_explanation,
    explanation_prompt,
)

__all__ = [
    "IntentExtractor",
    "IntentRule",
    "INTENT_RULES",
    "ENTITY_BUILDERS",
    "intent_extractor",
    "WorkflowSynthesizer",
    "suggest_improvements",
    "local_explanation",
    "explanation_prompt",
]
