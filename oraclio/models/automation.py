"""Automation intent and workflow models."""

from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, Field


class IntentType(str, Enum):
    """Closed set of automation intents."""

    CREATE_BOT = "create_bot"
    MODIFY_BOT = "modify_bot"
    DELETE_BOT = "delete_bot"
    EXPLAIN_BOT = "explain_bot"


class TriggerType(str, Enum):
    SCHEDULE = "schedule"
    WEBHOOK = "webhook"
    MANUAL = "manual"


class StepType(str, Enum):
    FETCH_DATA = "fetch_data"
    PROCESS_DATA = "process_data"
    SEND_NOTIFICATION = "send_notification"
    CONDITIONAL = "conditional"


class TriggerEntity(BaseModel):
    type: TriggerType = Field(description="Trigger kind")
    schedule: Optional[str] = Field(None, description="Time of day, HH:MM")
    frequency: Optional[str] = Field(None, description="daily, weekly or monthly")


class DataSourceEntity(BaseModel):
    integration: str = Field(description="Integration the data comes from")
    filters: List[str] = Field(default_factory=list, description="Filter tokens such as status:new")


class ActionEntity(BaseModel):
    type: str = Field(default="send_message", description="send_message, create_report or update_data")
    target: str = Field(description="Output channel")
    format: str = Field(default="message", description="message or report")


class MetricEntity(BaseModel):
    type: str = Field(description="Metric name: leads, sales or revenue")
    aggregation: str = Field(default="sum", description="count or sum")
    timeframe: str = Field(default="today", description="today or yesterday")


class IntentEntities(BaseModel):
    """Entities found in an utterance; absent means not mentioned."""

    trigger: Optional[TriggerEntity] = None
    data_source: Optional[DataSourceEntity] = None
    actions: Optional[ActionEntity] = None
    metrics: Optional[MetricEntity] = None


class Intent(BaseModel):
    """Classified purpose of an utterance plus extracted entities."""

    type: IntentType = Field(description="Intent category")
    confidence: float = Field(description="Fixed confidence of the matched rule")
    entities: IntentEntities = Field(default_factory=IntentEntities, description="Extracted entities")
    raw_text: str = Field(description="Original utterance")


class WorkflowTrigger(BaseModel):
    type: TriggerType = Field(default=TriggerType.MANUAL, description="Trigger kind")
    config: Dict[str, Any] = Field(default_factory=dict, description="schedule and frequency")


class WorkflowStep(BaseModel):
    id: str = Field(description="Step ID")
    type: StepType = Field(description="Step kind")
    config: Dict[str, Any] = Field(default_factory=dict, description="Step configuration")
    next_steps: Optional[List[str]] = Field(None, description="IDs of the steps that follow")


class Workflow(BaseModel):
    """Synthesized automation pipeline."""

    id: str = Field(description="Workflow ID")
    name: str = Field(description="Readable workflow name")
    description: str = Field(description="Readable summary")
    trigger: WorkflowTrigger = Field(default_factory=WorkflowTrigger, description="What starts the workflow")
    steps: List[WorkflowStep] = Field(default_factory=list, description="Ordered steps")
    is_active: bool = Field(default=False, description="Whether the workflow runs")
    created_at: datetime = Field(default_factory=datetime.utcnow, description="Creation timestamp")
    last_run: Optional[datetime] = Field(None, description="Last run timestamp")


class InterpretRequest(BaseModel):
    """Request model for interpreting an automation request."""

    message: str = Field(description="Free-text automation request", min_length=1)
    user_id: int = Field(description="Requesting user ID")
    feedback: Optional[str] = Field(None, description="Optional feedback on a previous proposal")


class InterpretResponse(BaseModel):
    """Response model for an interpreted automation request."""

    intent: Intent
    workflow: Workflow
    explanation: str
    suggestions: List[str]


class ConfirmWorkflowRequest(BaseModel):
    """Request model for persisting a confirmed workflow."""

    user_id: int = Field(description="Owning user ID")
    workflow: Workflow = Field(description="Workflow as returned by interpret")


class StoredWorkflowResponse(BaseModel):
    """Response model for a persisted workflow."""

    id: str
    user_id: int
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    workflow: Workflow


class WorkflowListResponse(BaseModel):
    workflows: List[StoredWorkflowResponse]
    total: int
