"""Pytest fixtures for API testing."""

import random

import httpx
import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from oraclio.api import websocket
from oraclio.api.v1 import automations, chat
from oraclio.connectors.bitrix import BitrixClient
from oraclio.db import (
    ChatMessageRepository,
    IntegrationRepository,
    MetricRepository,
    UserRepository,
    WorkflowRepository,
)
from oraclio.nlp.intent import IntentExtractor
from oraclio.nlp.workflow import WorkflowSynthesizer
from oraclio.realtime.registry import ConnectionRegistry
from oraclio.responders.chain import ResponseGenerator
from oraclio.responders.local import LocalResponder
from oraclio.services import AutomationService, ChatService, ContextAssembler, ConversationStore


def _offline_crm():
    return httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(503)))


@pytest.fixture
def test_app(db_conn):
    """Test app without lifespan, with services injected into the routers."""
    store = ConversationStore(ChatMessageRepository(db_conn.conn))
    generator = ResponseGenerator([], LocalResponder(rng=random.Random(0)))
    assembler = ContextAssembler(
        users=UserRepository(db_conn.conn),
        integrations=IntegrationRepository(db_conn.conn),
        metrics=MetricRepository(db_conn.conn),
        store=store,
        crm=BitrixClient(http_client=_offline_crm()),
    )
    chat_service = ChatService(assembler, generator, store)
    registry = ConnectionRegistry()

    # Inject dependencies into routers
    chat.chat_service = chat_service
    chat.connection_registry = registry
    automations.automation_service = AutomationService(
        extractor=IntentExtractor(),
        synthesizer=WorkflowSynthesizer(),
        generator=generator,
        repository=WorkflowRepository(db_conn.conn),
    )
    websocket.chat_service = chat_service
    websocket.connection_registry = registry

    app = FastAPI(title="Oraclio Test")
    app.include_router(chat.router)
    app.include_router(automations.router)
    app.include_router(websocket.router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": "Oraclio Assistant"}

    yield app

    chat.chat_service = None
    chat.connection_registry = None
    automations.automation_service = None
    websocket.chat_service = None
    websocket.connection_registry = None


@pytest.fixture
async def client(test_app):
    """Create async HTTP client against the test app."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
