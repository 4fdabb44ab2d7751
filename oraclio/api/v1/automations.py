"""Automation REST API routes - V1"""

from fastapi import APIRouter, Depends, HTTPException

from ...models.automation import (
    ConfirmWorkflowRequest,
    InterpretRequest,
    InterpretResponse,
    StoredWorkflowResponse,
    WorkflowListResponse,
)
from ...services.automation_service import AutomationService

router = APIRouter(prefix="/api/v1/automations", tags=["automations-v1"])

# Global automation service instance (will be set by main.py)
automation_service: AutomationService = None


def get_automation_service() -> AutomationService:
    """Dependency to get automation service instance."""
    if automation_service is None:
        raise HTTPException(status_code=500, detail="Automation service not initialized")
    return automation_service


@router.post("/interpret", response_model=InterpretResponse)
async def interpret(request: InterpretRequest, service: AutomationService = Depends(get_automation_service)):
    """
    Interpret a free-text automation request.

    The proposed workflow is not stored; confirm it with ``POST /api/v1/automations``.
    """
    return await service.interpret(request.message, request.feedback)


@router.post("", response_model=StoredWorkflowResponse, status_code=201)
async def confirm_workflow(
    request: ConfirmWorkflowRequest,
    service: AutomationService = Depends(get_automation_service)
):
    """
    Persist a confirmed workflow.

    Raises:
        HTTPException: If a workflow with this id exists or storage fails
    """
    if service.get(request.workflow.id) is not None:
        raise HTTPException(status_code=409, detail=f"Workflow already exists: {request.workflow.id}")

    record = service.confirm(request.user_id, request.workflow)
    if record is None:
        raise HTTPException(status_code=500, detail="Failed to store workflow")

    return service.to_response(record)


@router.get("", response_model=WorkflowListResponse)
async def list_workflows(user_id: int, service: AutomationService = Depends(get_automation_service)):
    records = service.list_for_user(user_id)
    workflows = [service.to_response(record) for record in records]
    return WorkflowListResponse(workflows=workflows, total=len(workflows))


@router.get("/{workflow_id}", response_model=StoredWorkflowResponse)
async def get_workflow(workflow_id: str, service: AutomationService = Depends(get_automation_service)):
    record = service.get(workflow_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Workflow not found: {workflow_id}")
    return service.to_response(record)


@router.delete("/{workflow_id}")
async def delete_workflow(workflow_id: str, service: AutomationService = Depends(get_automation_service)):
    """
    Delete a stored workflow.

    Raises:
        HTTPException: If workflow not found
    """
    if not service.delete(workflow_id):
        raise HTTPException(status_code=404, detail=f"Workflow not found: {workflow_id}")
    return {"success": True, "workflow_id": workflow_id}
