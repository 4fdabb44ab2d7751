"""Automation requests: interpretation, explanation and confirmed storage."""

from typing import List, Optional

from ..db.database_models.workflow import WorkflowDO
from ..db.repositories.workflow import WorkflowRepository
from ..models.automation import InterpretResponse, StoredWorkflowResponse, Workflow
from ..models.context import BusinessContext
from ..nlp.intent import IntentExtractor
from ..nlp.workflow import WorkflowSynthesizer, explanation_prompt, local_explanation, suggest_improvements
from ..responders.chain import ResponseGenerator
from ..utils.logger import get_app_logger


class AutomationService:
    """Turns automation requests into proposed workflows and stores confirmed ones."""

    def __init__(
        self,
        extractor: IntentExtractor,
        synthesizer: WorkflowSynthesizer,
        generator: ResponseGenerator,
        repository: WorkflowRepository
    ):
        self.extractor = extractor
        self.synthesizer = synthesizer
        self.generator = generator
        self.repository = repository
        self.logger = get_app_logger()

    async def interpret(self, message: str, feedback: Optional[str] = None) -> InterpretResponse:
        """Extract the intent, synthesize a workflow and explain it. Nothing is persisted."""
        intent = self.extractor.extract_intent(message)
        workflow = self.synthesizer.synthesize(intent)
        self.logger.info(
            f"Interpreted automation request as {intent.type.value} "
            f"({len(workflow.steps)} steps, confidence {intent.confidence})"
        )
        return InterpretResponse(
            intent=intent,
            workflow=workflow,
            explanation=await self.explain(workflow),
            suggestions=suggest_improvements(workflow, feedback),
        )

    async def explain(self, workflow: Workflow) -> str:
        reply = await self.generator.try_remote(explanation_prompt(workflow), BusinessContext())
        return reply or local_explanation(workflow)

    def confirm(self, user_id: int, workflow: Workflow) -> Optional[WorkflowDO]:
        record = WorkflowDO(
            id=workflow.id,
            user_id=user_id,
            name=workflow.name,
            description=workflow.description,
            definition=workflow.model_dump(mode="json"),
            is_active=workflow.is_active,
            created_at=workflow.created_at,
        )
        if not self.repository.create(record):
            return None
        return record

    def get(self, workflow_id: str) -> Optional[WorkflowDO]:
        return self.repository.get(workflow_id)

    def list_for_user(self, user_id: int) -> List[WorkflowDO]:
        return self.repository.list_by_user(user_id)

    def delete(self, workflow_id: str) -> bool:
        return self.repository.delete(workflow_id)

    @staticmethod
    def to_response(record: WorkflowDO) -> StoredWorkflowResponse:
        return StoredWorkflowResponse(
            id=record.id,
            user_id=record.user_id,
            name=record.name,
            description=record.description,
            is_active=record.is_active,
            created_at=record.created_at,
            workflow=Workflow.model_validate(record.definition),
        )
