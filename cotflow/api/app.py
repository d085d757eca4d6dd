"""
FastAPI application serving agent execution.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cotflow import __version__
from cotflow.config.settings import CotflowSettings, settings as default_settings
from cotflow.llm.openai import OpenAIModelClient
from cotflow.memory.storage import InMemoryStorage, RedisStorage
from cotflow.runtime.executor import AgentExecutor, build_executor
from cotflow.storage.agents import AgentStore, InMemoryAgentStore, YamlAgentStore
from cotflow.storage.search import HttpSearchClient
from cotflow.utils.logging import get_logger

logger = get_logger(__name__)


def _build_from_settings(config: CotflowSettings):
    """Build an executor and the resources it owns from settings."""
    agent_store: AgentStore
    if config.agents_dir:
        agent_store = YamlAgentStore(config.agents_dir)
    else:
        logger.warning("agents_dir_not_configured")
        agent_store = InMemoryAgentStore()

    api_key = config.openai_api_key.get_secret_value() if config.openai_api_key else None
    model_client = OpenAIModelClient(api_key=api_key, base_url=config.openai_base_url)
    memory_storage = RedisStorage(config.redis_url) if config.redis_url else InMemoryStorage()
    search_client = HttpSearchClient(config.search_base_url) if config.search_base_url else None

    executor = build_executor(
        agent_store,
        model_client,
        memory_storage=memory_storage,
        search_client=search_client,
        config=config,
    )
    resources = [model_client, memory_storage]
    if search_client is not None:
        resources.append(search_client)
    return executor, resources


def create_app(
    executor: AgentExecutor | None = None,
    config: CotflowSettings | None = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        executor: Pre-built executor; built from settings at startup when omitted
        config: Settings used when building the executor

    Returns:
        Configured FastAPI application
    """
    from .router import create_router

    config = config or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("cotflow_api_starting")
        resources = []
        if getattr(app.state, "executor", None) is None:
            try:
                app.state.executor, resources = _build_from_settings(config)
            except Exception as e:
                logger.error("cotflow_api_init_failed", error=str(e), exc_info=True)
                raise
        logger.info(
            "cotflow_api_initialized",
            tools=app.state.executor.tool_registry.list_available(),
        )

        yield

        for resource in resources:
            await resource.close()
        logger.info("cotflow_api_shutdown")

    app = FastAPI(
        title="cotflow API",
        description="Run reasoning and pipeline agents.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.executor = executor

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_router())
    return app
