"""Tests for WorkflowSynthesizer and workflow helpers."""

from datetime import datetime

import pytest

from oraclio.models.automation import (
    ActionEntity,
    DataSourceEntity,
    Intent,
    IntentEntities,
    IntentType,
    MetricEntity,
    StepType,
    TriggerEntity,
    TriggerType,
)
from oraclio.nlp.intent import IntentExtractor
from oraclio.nlp.workflow import (
    WorkflowSynthesizer,
    default_id_factory,
    explanation_prompt,
    local_explanation,
    required_fields,
    suggest_improvements,
)


FIXED_TIME = datetime(2024, 5, 1, 10, 0, 0)


@pytest.fixture
def synthesizer():
    return WorkflowSynthesizer(id_factory=lambda: "bot_test", clock=lambda: FIXED_TIME)


@pytest.fixture
def full_intent():
    return IntentExtractor().extract_intent(
        "create a bot that sends leads from bitrix24 to slack every day at 09:00"
    )


def _intent(**entities):
    return Intent(
        type=IntentType.CREATE_BOT,
        confidence=0.85,
        entities=IntentEntities(**entities),
        raw_text="create a bot",
    )


class TestWorkflowSynthesizer:
    """Tests for WorkflowSynthesizer."""

    class TestSynthesize:
        """SUT: WorkflowSynthesizer.synthesize"""

        def test_step_order_and_links(self, synthesizer, full_intent):
            workflow = synthesizer.synthesize(full_intent)
            assert [s.type for s in workflow.steps] == [
                StepType.FETCH_DATA,
                StepType.PROCESS_DATA,
                StepType.SEND_NOTIFICATION,
            ]
            assert [s.id for s in workflow.steps] == ["fetch_bot_test", "process_bot_test", "notify_bot_test"]
            assert workflow.steps[0].next_steps == ["process_bot_test"]
            assert workflow.steps[1].next_steps == ["notify_bot_test"]
            assert workflow.steps[2].next_steps is None

        def test_step_configs(self, synthesizer, full_intent):
            fetch, process, notify = synthesizer.synthesize(full_intent).steps
            assert fetch.config == {"source": "bitrix24", "filters": [], "fields": ["id", "title", "created_date"]}
            assert process.config == {"aggregation": "sum", "group_by": "leads", "timeframe": "today"}
            assert notify.config["target"] == "slack"
            assert notify.config["format"] == "message"
            assert "{{count}}" in notify.config["template"]
            assert "{{details}}" in notify.config["template"]

        def test_metadata(self, synthesizer, full_intent):
            workflow = synthesizer.synthesize(full_intent)
            assert workflow.id == "bot_test"
            assert workflow.name == "Leads Slack From Bitrix24"
            assert workflow.description == (
                "Runs daily, fetches data from bitrix24, calculates leads metrics, sends results to slack"
            )
            assert workflow.trigger.type == TriggerType.SCHEDULE
            assert workflow.trigger.config == {"schedule": "09:00", "frequency": "daily"}
            assert workflow.is_active is False
            assert workflow.created_at == FIXED_TIME

        def test_empty_intent(self, synthesizer):
            workflow = synthesizer.synthesize(_intent())
            assert workflow.steps == []
            assert workflow.trigger.type == TriggerType.MANUAL
            assert workflow.name == "Data Notification From System"
            assert workflow.description == "Custom bot workflow"

        def test_only_present_families(self, synthesizer):
            workflow = synthesizer.synthesize(_intent(actions=ActionEntity(target="telegram")))
            assert [s.type for s in workflow.steps] == [StepType.SEND_NOTIFICATION]
            assert workflow.steps[0].next_steps is None

        def test_same_steps_for_same_intent(self, synthesizer, full_intent):
            first = synthesizer.synthesize(full_intent)
            second = synthesizer.synthesize(full_intent)
            assert [s.model_dump() for s in first.steps] == [s.model_dump() for s in second.steps]

        def test_default_ids_are_unique(self, full_intent):
            synthesizer = WorkflowSynthesizer()
            assert synthesizer.synthesize(full_intent).id != synthesizer.synthesize(full_intent).id
            assert default_id_factory().startswith("bot_")

    class TestRequiredFields:
        """SUT: required_fields"""

        def test_none(self):
            assert required_fields(None) == ["id", "title", "created_date"]

        def test_sales(self):
            assert required_fields(MetricEntity(type="sales")) == [
                "id", "title", "created_date", "opportunity", "stage_id", "assigned_by_id",
            ]

        def test_revenue(self):
            assert required_fields(MetricEntity(type="revenue"))[-2:] == ["opportunity", "currency_id"]


class TestSuggestImprovements:
    """SUT: suggest_improvements"""

    def test_daily_schedule_suggests_manager_filter(self, synthesizer, full_intent):
        suggestions = suggest_improvements(synthesizer.synthesize(full_intent))
        assert suggestions == ["Consider adding a filter by manager to get more specific data"]

    def test_missing_source_and_notification(self, synthesizer):
        suggestions = suggest_improvements(synthesizer.synthesize(_intent()))
        assert "Add a data source to make your bot more useful" in suggestions
        assert "Add a notification method to receive bot updates" in suggestions

    def test_feedback(self, synthesizer):
        workflow = synthesizer.synthesize(_intent(
            trigger=TriggerEntity(type=TriggerType.SCHEDULE, schedule="09:00", frequency="weekly"),
            data_source=DataSourceEntity(integration="crm"),
            actions=ActionEntity(target="email"),
        ))
        suggestions = suggest_improvements(workflow, "Too often, and I want more details")
        assert suggestions == [
            "Change frequency from daily to weekly",
            "Add additional metrics like conversion rate or deal value",
        ]

    def test_russian_feedback(self, synthesizer):
        suggestions = suggest_improvements(synthesizer.synthesize(_intent()), "слишком часто")
        assert "Change frequency from daily to weekly" in suggestions


class TestExplanation:
    """SUT: local_explanation, explanation_prompt"""

    def test_local_explanation_scheduled(self, synthesizer, full_intent):
        text = local_explanation(synthesizer.synthesize(full_intent))
        assert text.startswith('This bot "Leads Slack From Bitrix24" will Runs daily')
        assert "automatically on schedule" in text
        assert "3 steps" in text

    def test_local_explanation_manual(self, synthesizer):
        assert "run manually" in local_explanation(synthesizer.synthesize(_intent()))

    def test_prompt_lists_steps(self, synthesizer, full_intent):
        prompt = explanation_prompt(synthesizer.synthesize(full_intent))
        assert "Bot Name: Leads Slack From Bitrix24" in prompt
        assert "1. fetch_data:" in prompt
        assert "3. send_notification:" in prompt
