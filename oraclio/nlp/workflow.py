"""Workflow synthesis from an extracted intent."""

import uuid
from datetime import datetime
from typing import Callable, List, Optional

from ..models.automation import (
    Intent,
    MetricEntity,
    StepType,
    TriggerType,
    Workflow,
    WorkflowStep,
    WorkflowTrigger,
)


BASE_FIELDS = ["id", "title", "created_date"]

# Extra CRM fields a metric needs on top of BASE_FIELDS
METRIC_FIELDS = {
    "sales": ["opportunity", "stage_id", "assigned_by_id"],
    "revenue": ["opportunity", "currency_id"],
}

FEEDBACK_SUGGESTIONS = (
    (("too often", "слишком часто"), "Change frequency from daily to weekly"),
    (("more details", "больше деталей"), "Add additional metrics like conversion rate or deal value"),
)


def default_id_factory() -> str:
    return f"bot_{uuid.uuid4().hex}"


def required_fields(metrics: Optional[MetricEntity]) -> List[str]:
    fields = list(BASE_FIELDS)
    if metrics is None:
        return fields
    for name in METRIC_FIELDS.get(metrics.type, []):
        if name not in fields:
            fields.append(name)
    return fields


def message_template(intent: Intent) -> str:
    metrics = intent.entities.metrics
    metric = metrics.type if metrics else "data"
    timeframe = metrics.timeframe if metrics else "today"
    return (
        f"📊 {metric.capitalize()} Report for {timeframe}:\n\n"
        "Total: {{count}}\n"
        "Details: {{details}}\n\n"
        "Generated by Oraclio Bot"
    )


def workflow_name(intent: Intent) -> str:
    entities = intent.entities
    metric = entities.metrics.type if entities.metrics else "data"
    target = entities.actions.target if entities.actions else "notification"
    source = entities.data_source.integration if entities.data_source else "system"
    return " ".join(word[:1].upper() + word[1:] for word in f"{metric} {target} from {source}".split())


def workflow_description(intent: Intent) -> str:
    entities = intent.entities
    parts = []
    if entities.trigger and entities.trigger.frequency:
        parts.append(f"Runs {entities.trigger.frequency}")
    if entities.data_source:
        parts.append(f"fetches data from {entities.data_source.integration}")
    if entities.metrics:
        parts.append(f"calculates {entities.metrics.type} metrics")
    if entities.actions:
        parts.append(f"sends results to {entities.actions.target}")
    return ", ".join(parts) or "Custom bot workflow"


class WorkflowSynthesizer:
    """
    Turns an Intent into a Workflow.

    Steps are emitted in fetch -> process -> notify order, one per entity
    family present in the intent, and linked through ``next_steps``.
    Synthesis has no side effects; the id factory and clock are injected so
    the output is fully determined by the inputs.
    """

    def __init__(
        self,
        id_factory: Callable[[], str] = default_id_factory,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.id_factory = id_factory
        self.clock = clock

    def synthesize(self, intent: Intent) -> Workflow:
        workflow_id = self.id_factory()
        entities = intent.entities
        steps: List[WorkflowStep] = []

        if entities.data_source:
            steps.append(WorkflowStep(
                id=f"fetch_{workflow_id}",
                type=StepType.FETCH_DATA,
                config={
                    "source": entities.data_source.integration,
                    "filters": list(entities.data_source.filters),
                    "fields": required_fields(entities.metrics),
                },
            ))

        if entities.metrics:
            steps.append(WorkflowStep(
                id=f"process_{workflow_id}",
                type=StepType.PROCESS_DATA,
                config={
                    "aggregation": entities.metrics.aggregation,
                    "group_by": entities.metrics.type,
                    "timeframe": entities.metrics.timeframe,
                },
            ))

        if entities.actions:
            steps.append(WorkflowStep(
                id=f"notify_{workflow_id}",
                type=StepType.SEND_NOTIFICATION,
                config={
                    "target": entities.actions.target,
                    "format": entities.actions.format,
                    "template": message_template(intent),
                },
            ))

        for current, following in zip(steps, steps[1:]):
            current.next_steps = [following.id]

        trigger = entities.trigger
        return Workflow(
            id=workflow_id,
            name=workflow_name(intent),
            description=workflow_description(intent),
            trigger=WorkflowTrigger(
                type=trigger.type if trigger else TriggerType.MANUAL,
                config={
                    "schedule": trigger.schedule if trigger else None,
                    "frequency": trigger.frequency if trigger else None,
                },
            ),
            steps=steps,
            is_active=False,
            created_at=self.clock(),
        )


def suggest_improvements(workflow: Workflow, feedback: Optional[str] = None) -> List[str]:
    """Improvement hints for a proposed workflow, optionally steered by user feedback."""
    suggestions = []

    if workflow.trigger.type == TriggerType.SCHEDULE and workflow.trigger.config.get("frequency") == "daily":
        suggestions.append("Consider adding a filter by manager to get more specific data")

    step_types = {step.type for step in workflow.steps}
    if StepType.FETCH_DATA not in step_types:
        suggestions.append("Add a data source to make your bot more useful")
    if StepType.SEND_NOTIFICATION not in step_types:
        suggestions.append("Add a notification method to receive bot updates")

    if feedback:
        lowered = feedback.lower()
        for phrases, suggestion in FEEDBACK_SUGGESTIONS:
            if any(phrase in lowered for phrase in phrases):
                suggestions.append(suggestion)

    return suggestions


def local_explanation(workflow: Workflow) -> str:
    mode = "automatically on schedule" if workflow.trigger.type == TriggerType.SCHEDULE else "manually"
    return (
        f'This bot "{workflow.name}" will {workflow.description}. '
        f"It's set to run {mode} and will execute {len(workflow.steps)} steps to complete its task."
    )


def explanation_prompt(workflow: Workflow) -> str:
    lines = [
        "Explain this bot workflow in simple terms:",
        "",
        f"Bot Name: {workflow.name}",
        f"Description: {workflow.description}",
        "",
        f"Trigger: {workflow.trigger.type.value} - {workflow.trigger.config}",
        "",
        "Steps:",
    ]
    for index, step in enumerate(workflow.steps, start=1):
        lines.append(f"{index}. {step.type.value}: {step.config}")
    lines.append("")
    lines.append("Provide a clear, user-friendly explanation of what this bot does and how it works.")
    return "\n".join(lines)
