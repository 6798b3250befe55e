"""OpenTelemetry initialization helpers for moviegraph."""

from __future__ import annotations

import logging
import sys
from typing import Dict, Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter

from moviegraph.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)
_TRACING_INITIALIZED = False


def setup_tracing(config: Optional[Settings] = None) -> bool:
    """Install an SDK tracer provider when tracing is enabled.

    Returns True when a provider was installed by this call. Without a
    provider the API tracer used by the tour is a no-op.
    """

    global _TRACING_INITIALIZED
    config = config or default_settings
    if _TRACING_INITIALIZED or not config.TRACING_ENABLED:
        return False

    resource = Resource.create(
        {
            "service.name": config.APP_NAME,
            "service.version": config.APP_VERSION,
            "environment": config.ENVIRONMENT,
        }
    )
    provider = TracerProvider(resource=resource)
    exporter = _select_exporter(config)
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    _TRACING_INITIALIZED = True
    logger.info("OpenTelemetry tracing initialized with %s exporter", exporter.__class__.__name__)
    return True


def shutdown_tracing() -> None:
    provider = trace.get_tracer_provider()
    shutdown = getattr(provider, "shutdown", None)
    if callable(shutdown):
        shutdown()


def _select_exporter(config: Settings) -> SpanExporter:
    if config.OTEL_EXPORTER_OTLP_ENDPOINT:
        headers = _parse_headers(config.OTEL_EXPORTER_OTLP_HEADERS)
        return OTLPSpanExporter(endpoint=str(config.OTEL_EXPORTER_OTLP_ENDPOINT), headers=headers or None)
    return ConsoleSpanExporter(out=sys.stderr)


def _parse_headers(raw_headers: Optional[str]) -> Dict[str, str]:
    """Parse `key=value` pairs separated by commas; malformed entries are skipped."""

    entries = (item.partition("=") for item in (raw_headers or "").split(","))
    return {key.strip(): value.strip() for key, sep, value in entries if sep and key.strip()}


__all__ = ["setup_tracing", "shutdown_tracing"]
