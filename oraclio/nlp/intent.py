"""Pattern-based automation intent and entity extraction.

Recognition is table driven. ``INTENT_RULES`` is evaluated top to bottom and
the first rule whose phrase matches decides the category; utterances that
match nothing are routed to conversational explanation. Entity families are
probed independently through ``ENTITY_BUILDERS`` so a message can yield any
subset of trigger / data source / action / metric.

Adding a language or a phrase means extending one of the pattern tables
below. Text is lower-cased before matching, so patterns are written in lower
case and cover both Latin and Cyrillic spellings.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Pattern, Tuple

from ..models.automation import (
    ActionEntity,
    DataSourceEntity,
    Intent,
    IntentEntities,
    IntentType,
    MetricEntity,
    TriggerEntity,
    TriggerType,
)


EXPLAIN_CONFIDENCE = 0.3
CREATE_CONFIDENCE = 0.85

DEFAULT_SCHEDULE = "09:00"
DEFAULT_FREQUENCY = "daily"


def _compile(*patterns: str) -> Tuple[Pattern, ...]:
    return tuple(re.compile(p) for p in patterns)


CREATE_PATTERNS = _compile(
    r"(?:create|make|build|generate)\s+(?:a\s+)?bot",
    r"(?:want|need)\s+(?:a\s+)?bot",
    r"bot\s+(?:that|which|to)",
    r"хочу\s+бота",
    r"создай\s+бота",
    r"сделай\s+бота",
)

SCHEDULE_PATTERNS = _compile(
    r"every\s+day",
    r"every\s+week",
    r"every\s+month",
    r"daily",
    r"weekly",
    r"monthly",
    r"каждый\s+день",
    r"каждую\s+неделю",
    r"каждый\s+месяц",
    r"ежедневно",
    r"еженедельно",
    r"ежемесячно",
    r"по\s+времени",
    r"в\s+\d{1,2}:\d{2}",
    r"at\s+\d{1,2}:\d{2}",
)

TIME_PATTERN = re.compile(r"(?<!\d)(\d{1,2}):(\d{2})(?!\d)")

# Checked in order; the first hit wins.
FREQUENCY_PATTERNS: Tuple[Tuple[Pattern, str], ...] = (
    (re.compile(r"daily|every\s+day|ежедневно|каждый\s+день"), "daily"),
    (re.compile(r"weekly|every\s+week|еженедельно|каждую\s+неделю"), "weekly"),
    (re.compile(r"monthly|every\s+month|ежемесячно|каждый\s+месяц"), "monthly"),
)

INTEGRATION_ALIASES: Dict[str, str] = {
    "bitrix24": "bitrix24",
    "битрикс24": "bitrix24",
    "битрикс": "bitrix24",
    "crm": "crm",
    "notion": "notion",
    "excel": "excel",
    "gmail": "gmail",
    "slack": "slack",
}

CHANNEL_ALIASES: Dict[str, str] = {
    "telegram": "telegram",
    "телеграм": "telegram",
    "slack": "slack",
    "слак": "slack",
    "email": "email",
}

METRIC_ALIASES: Dict[str, str] = {
    "leads": "leads",
    "заявки": "leads",
    "sales": "sales",
    "продажи": "sales",
    "revenue": "revenue",
    "доход": "revenue",
}


def _alternation(aliases: Dict[str, str]) -> str:
    # Longest first so "bitrix24" wins over a shorter prefix
    return "|".join(sorted(aliases, key=len, reverse=True))


INTEGRATION_PATTERN = re.compile(f"({_alternation(INTEGRATION_ALIASES)})")
INTEGRATION_AFTER_FROM = re.compile(rf"(?:from|из)\s+({_alternation(INTEGRATION_ALIASES)})")
CHANNEL_PATTERN = re.compile(f"({_alternation(CHANNEL_ALIASES)})")
CHANNEL_AFTER_TO = re.compile(rf"(?:\bto|\bв|\bво)\s+({_alternation(CHANNEL_ALIASES)})")
METRIC_PATTERN = re.compile(f"({_alternation(METRIC_ALIASES)})")

FILTER_PATTERNS: Tuple[Tuple[Pattern, str], ...] = (
    (re.compile(r"\bnew\b|\bнов"), "status:new"),
    (re.compile(r"yesterday|вчера"), "date:yesterday"),
    (re.compile(r"manager|менеджер"), "assigned_user"),
)

REPORT_PATTERN = re.compile(r"report|отч[её]т")
COUNT_PATTERN = re.compile(r"count|количество")
YESTERDAY_PATTERN = re.compile(r"yesterday|вчера")


def build_trigger(text: str) -> Optional[TriggerEntity]:
    if not any(p.search(text) for p in SCHEDULE_PATTERNS):
        return None

    time_match = TIME_PATTERN.search(text)
    schedule = f"{int(time_match.group(1)):02d}:{time_match.group(2)}" if time_match else DEFAULT_SCHEDULE

    frequency = DEFAULT_FREQUENCY
    for pattern, name in FREQUENCY_PATTERNS:
        if pattern.search(text):
            frequency = name
            break

    return TriggerEntity(type=TriggerType.SCHEDULE, schedule=schedule, frequency=frequency)


def extract_filters(text: str) -> list:
    return [token for pattern, token in FILTER_PATTERNS if pattern.search(text)]


def build_data_source(text: str) -> Optional[DataSourceEntity]:
    match = INTEGRATION_AFTER_FROM.search(text) or INTEGRATION_PATTERN.search(text)
    if not match:
        return None
    return DataSourceEntity(
        integration=INTEGRATION_ALIASES[match.group(1)],
        filters=extract_filters(text),
    )


def build_actions(text: str) -> Optional[ActionEntity]:
    match = CHANNEL_AFTER_TO.search(text) or CHANNEL_PATTERN.search(text)
    if not match:
        return None
    return ActionEntity(
        type="send_message",
        target=CHANNEL_ALIASES[match.group(1)],
        format="report" if REPORT_PATTERN.search(text) else "message",
    )


def build_metrics(text: str) -> Optional[MetricEntity]:
    match = METRIC_PATTERN.search(text)
    if not match:
        return None
    return MetricEntity(
        type=METRIC_ALIASES[match.group(1)],
        aggregation="count" if COUNT_PATTERN.search(text) else "sum",
        timeframe="yesterday" if YESTERDAY_PATTERN.search(text) else "today",
    )


@dataclass(frozen=True)
class IntentRule:
    """One row of the intent table."""

    category: IntentType
    patterns: Tuple[Pattern, ...]
    confidence: float

    def matches(self, text: str) -> bool:
        return any(p.search(text) for p in self.patterns)


INTENT_RULES: Tuple[IntentRule, ...] = (
    IntentRule(IntentType.CREATE_BOT, CREATE_PATTERNS, CREATE_CONFIDENCE),
)

EntityBuilder = Callable[[str], object]

ENTITY_BUILDERS: Tuple[Tuple[str, EntityBuilder], ...] = (
    ("trigger", build_trigger),
    ("data_source", build_data_source),
    ("actions", build_actions),
    ("metrics", build_metrics),
)


class IntentExtractor:
    """Classifies an utterance and extracts automation entities."""

    def __init__(
        self,
        rules: Tuple[IntentRule, ...] = INTENT_RULES,
        entity_builders: Tuple[Tuple[str, EntityBuilder], ...] = ENTITY_BUILDERS,
    ):
        self.rules = rules
        self.entity_builders = entity_builders

    def extract_intent(self, text: str) -> Intent:
        normalized = text.lower().strip()

        for rule in self.rules:
            if rule.matches(normalized):
                return Intent(
                    type=rule.category,
                    confidence=rule.confidence,
                    entities=self.extract_entities(normalized),
                    raw_text=text,
                )

        return Intent(
            type=IntentType.EXPLAIN_BOT,
            confidence=EXPLAIN_CONFIDENCE,
            entities=IntentEntities(),
            raw_text=text,
        )

    def extract_entities(self, normalized: str) -> IntentEntities:
        found = {}
        for family, builder in self.entity_builders:
            entity = builder(normalized)
            if entity is not None:
                found[family] = entity
        return IntentEntities(**found)


# Global singleton
intent_extractor = IntentExtractor()
