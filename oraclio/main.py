"""FastAPI main application."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .connectors.bitrix import BitrixClient
from .db import (
    ChatMessageRepository,
    DatabaseConnection,
    IntegrationRepository,
    MetricRepository,
    UserRepository,
    WorkflowRepository,
)
from .nlp.intent import intent_extractor
from .nlp.workflow import WorkflowSynthesizer
from .realtime.registry import ConnectionRegistry, HeartbeatMonitor
from .responders.chain import ResponseGenerator
from .responders.local import LocalResponder
from .responders.registry import responder_registry
from .services import AutomationService, ChatService, ContextAssembler, ConversationStore
from .utils.logger import init_app_logger
from .api.v1 import automations, chat
from .api import websocket


# Initialize logger
logger = init_app_logger(settings)


def mask_key(key: str) -> str:
    if not key:
        return "Not set"
    return key[:8] + "..." + key[-4:] if len(key) > 12 else "***"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Args:
        app: FastAPI application instance
    """
    # Startup
    logger.info("=" * 70)
    logger.info("Starting Oraclio Assistant...")
    logger.info("=" * 70)

    logger.info("")
    logger.info("📡 Server Configuration:")
    logger.info(f"  Host: {settings.host}")
    logger.info(f"  Port: {settings.port}")
    logger.info(f"  Debug: {settings.debug}")
    logger.info(f"  Log Level: {settings.log_level}")
    logger.info(f"  Log File: {settings.log_file}")
    logger.info(f"  Database: {settings.database_path}")

    logger.info("")
    logger.info("🤖 Responder Chain:")
    logger.info(f"  Order: {' -> '.join(settings.get_enabled_responders() + ['local'])}")
    logger.info(f"  Provider Timeout: {settings.provider_timeout}s")
    for name in settings.get_enabled_responders():
        if not responder_registry.is_registered(name):
            continue
        config = settings.get_responder_config(name)
        logger.info(f"  {name}: model={config['model']} api_key={mask_key(config['api_key'])}")

    logger.info("")
    logger.info("💓 Real-time Configuration:")
    logger.info(f"  Heartbeat Interval: {settings.heartbeat_interval}s")

    db = DatabaseConnection(settings.database_path)
    http_client = httpx.AsyncClient(timeout=settings.provider_timeout)

    store = ConversationStore(ChatMessageRepository(db.conn))
    generator = ResponseGenerator(
        remotes=responder_registry.build_chain(settings, http_client),
        local=LocalResponder(assistant_name=settings.assistant_name),
        timeout=settings.provider_timeout,
    )
    assembler = ContextAssembler(
        users=UserRepository(db.conn),
        integrations=IntegrationRepository(db.conn),
        metrics=MetricRepository(db.conn),
        store=store,
        crm=BitrixClient(timeout=settings.crm_timeout, http_client=http_client),
        crm_fetch_limit=settings.crm_fetch_limit,
        top_customers_limit=settings.top_customers_limit,
        recent_activities_limit=settings.recent_activities_limit,
        history_limit=settings.history_limit,
    )
    chat_service = ChatService(assembler, generator, store)
    automation_service = AutomationService(
        extractor=intent_extractor,
        synthesizer=WorkflowSynthesizer(),
        generator=generator,
        repository=WorkflowRepository(db.conn),
    )

    connection_registry = ConnectionRegistry()
    heartbeat = HeartbeatMonitor(connection_registry, interval=settings.heartbeat_interval)
    heartbeat.start()

    # Set service instances in API modules
    chat.chat_service = chat_service
    chat.connection_registry = connection_registry
    automations.automation_service = automation_service
    websocket.chat_service = chat_service
    websocket.connection_registry = connection_registry

    logger.info("")
    logger.info("=" * 70)
    logger.info("✅ Oraclio Assistant started successfully!")
    logger.info(f"📍 Access at: http://{settings.host}:{settings.port}")
    logger.info(f"📚 API Docs: http://{settings.host}:{settings.port}/docs")
    logger.info("=" * 70)

    yield

    # Shutdown
    logger.info("")
    logger.info("=" * 70)
    logger.info("Shutting down Oraclio Assistant...")
    logger.info("=" * 70)

    await heartbeat.stop()
    await connection_registry.close_all()
    await http_client.aclose()
    db.close()

    logger.info("✅ Oraclio Assistant shut down successfully")


# Create FastAPI application
app = FastAPI(
    title="Oraclio Assistant",
    description="Conversational business assistant with automation intent recognition",
    version="1.0.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(chat.router)
app.include_router(automations.router)
app.include_router(websocket.router)


@app.get("/health")
async def health():
    """
    Simple health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": "Oraclio Assistant"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "oraclio.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
