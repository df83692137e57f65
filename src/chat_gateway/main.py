"""
Chat Gateway Service

A FastAPI service exposing one chat endpoint that forwards provider-agnostic
requests to OpenAI, Anthropic, DeepSeek, Gemini or Novita and returns a
normalized reply.

Features:
- Per-model parameter profiles with fail-open validation
- Profile listing for settings clients
- Uniform {"error": ...} bodies for every failure
- OpenTelemetry tracing when an OTLP endpoint is configured
"""

import os
import logging
from typing import List, Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource

from .core.config import GatewayConfig, load_config
from .core.dispatcher import Dispatcher, build_dispatcher
from .core.errors import ChatGatewayError
from .core.registry import ProfileRegistry, load_profiles
from .models.request import ChatRequest
from .models.response import ChatResponse, ProfileSummary

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

tracer = trace.get_tracer(__name__)


def setup_tracing(otel_endpoint: str) -> None:
    """Export spans to an OTLP collector."""
    resource = Resource.create({"service.name": "chat-gateway"})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otel_endpoint, insecure=True)))
    trace.set_tracer_provider(provider)


def create_app(
    dispatcher: Optional[Dispatcher] = None,
    registry: Optional[ProfileRegistry] = None,
    config: Optional[GatewayConfig] = None,
) -> FastAPI:
    """
    Build the gateway application.

    Args:
        dispatcher: Dispatcher to serve requests (built from config if None)
        registry: Profile registry (taken from the dispatcher or loaded if None)
        config: Gateway configuration (loaded if None)

    Returns:
        Configured FastAPI app
    """
    config = config or load_config()
    if registry is None:
        registry = dispatcher.registry if dispatcher else load_profiles(config.profiles_path)
    if dispatcher is None:
        dispatcher = build_dispatcher(config, registry)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        if config.otel_endpoint:
            setup_tracing(config.otel_endpoint)
        logger.info(f"Chat gateway started with providers: {', '.join(dispatcher.providers)}")
        yield
        logger.info("Chat gateway stopped")

    app = FastAPI(
        title="Chat Gateway",
        description="Provider-agnostic chat completion gateway",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.otel_endpoint:
        FastAPIInstrumentor.instrument_app(app)

    app.state.dispatcher = dispatcher
    app.state.registry = registry

    @app.exception_handler(ChatGatewayError)
    async def gateway_error_handler(request: Request, exc: ChatGatewayError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Model service call failed"})

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "providers": dispatcher.providers,
            "profiles": registry.keys(),
        }

    @app.post("/api/chat", response_model=ChatResponse)
    async def chat(request: ChatRequest):
        """Forward one chat completion to the requested provider."""
        with tracer.start_as_current_span("chat.dispatch") as span:
            span.set_attribute("llm.provider", request.provider)
            span.set_attribute("llm.model", request.model)
            return await dispatcher.handle(
                provider=request.provider,
                model=request.model,
                api_key=request.api_key,
                messages=request.messages,
                raw_params=request.parameters,
            )

    @app.get("/api/profiles", response_model=List[ProfileSummary])
    async def list_profiles():
        """List all parameter profiles with their defaults."""
        return [profile.to_summary() for profile in registry.list_profiles()]

    @app.get("/api/profiles/{provider}", response_model=ProfileSummary)
    async def get_profile(provider: str, model: Optional[str] = Query(default=None)):
        """Profile that applies to a provider/model pair."""
        return registry.resolve(provider, model or "").to_summary()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(app, host="0.0.0.0", port=port)
