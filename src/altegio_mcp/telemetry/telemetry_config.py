import os
import logging
from typing import Optional
from opentelemetry import trace, metrics
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.sdk.resources import Resource
from prometheus_client import start_http_server
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class NullMetricInstrument:
    """Stand-in for counters and histograms when metrics collection is off"""
    def add(self, value, attributes=None):
        pass

    def record(self, value, attributes=None):
        pass


class NullTelemetry:
    """Null object implementation of TelemetryConfig that does nothing"""
    def __init__(self):
        self.tool_calls_counter = NullMetricInstrument()
        self.tool_duration_histogram = NullMetricInstrument()
        self.api_calls_counter = NullMetricInstrument()
        self.api_duration_histogram = NullMetricInstrument()
        self._initialized = True

    def initialize(self):
        pass

    def get_tracer(self, name: str):
        return None

    def get_meter(self, name: str):
        return None


class TelemetryConfig:
    def __init__(self):
        self.service_name = os.getenv("OTEL_SERVICE_NAME", "altegio-mcp")
        self.service_version = os.getenv("OTEL_SERVICE_VERSION", "")
        self.environment = os.getenv("ENV", "dev")

        self.otlp_traces_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
        self.otlp_metrics_endpoint = os.getenv("OTEL_EXPORTER_OTLP_METRICS_ENDPOINT")

        # Prometheus if necessary
        self.enable_prometheus = os.getenv("ENABLE_PROMETHEUS", "false").lower() in ("true", "1", "yes")
        self.prometheus_port = int(os.getenv("PROMETHEUS_PORT", "9464"))

        self.tracer_provider: Optional[TracerProvider] = None
        self.meter_provider: Optional[MeterProvider] = None
        self._initialized = False

        self._meter = None
        self.tool_calls_counter = None
        self.tool_duration_histogram = None
        self.api_calls_counter = None
        self.api_duration_histogram = None

    def _resource(self) -> Resource:
        return Resource.create({
            "service.name": self.service_name,
            "service.version": self.service_version,
            "deployment.environment": self.environment,
        })

    def setup_tracing(self):
        """Configure OpenTelemetry tracing"""
        self.tracer_provider = TracerProvider(resource=self._resource())
        span_processor = BatchSpanProcessor(OTLPSpanExporter(endpoint=self.otlp_traces_endpoint))
        self.tracer_provider.add_span_processor(span_processor)
        trace.set_tracer_provider(self.tracer_provider)
        logger.info(f"Tracing configured with OTLP endpoint: {self.otlp_traces_endpoint}")

    def setup_metrics(self):
        """Configure OpenTelemetry metrics"""
        metric_readers = [
            PeriodicExportingMetricReader(
                exporter=OTLPMetricExporter(endpoint=self.otlp_metrics_endpoint),
                export_interval_millis=5000
            )
        ]

        prometheus_reader = self._prometheus_reader()
        if prometheus_reader is not None:
            metric_readers.append(prometheus_reader)

        self.meter_provider = MeterProvider(
            resource=self._resource(),
            metric_readers=metric_readers
        )
        metrics.set_meter_provider(self.meter_provider)
        logger.info(f"Metrics configured with OTLP endpoint: {self.otlp_metrics_endpoint}")

        self._setup_metrics_instruments()

    def _prometheus_reader(self) -> Optional[PrometheusMetricReader]:
        if not self.enable_prometheus:
            return None
        reader = PrometheusMetricReader()
        start_http_server(self.prometheus_port)
        logger.info(f"Prometheus metrics enabled on port: {self.prometheus_port}")
        return reader

    def _setup_metrics_instruments(self):
        self._meter = self.get_meter("altegio_mcp_tools")

        self.tool_calls_counter = self._meter.create_counter(
            name="mcp_tool_calls_total",
            description="Total number of MCP tool calls by tool name and status",
            unit="1"
        )
        self.tool_duration_histogram = self._meter.create_histogram(
            name="mcp_tool_duration_seconds",
            description="Duration of MCP tool calls by tool name",
            unit="s"
        )
        self.api_calls_counter = self._meter.create_counter(
            name="altegio_api_calls_total",
            description="Total number of Altegio API requests by endpoint, method and status",
            unit="1"
        )
        self.api_duration_histogram = self._meter.create_histogram(
            name="altegio_api_duration_seconds",
            description="Latency of Altegio API requests",
            unit="s"
        )

    def initialize(self):
        """Initialize all telemetry components"""
        if self._initialized:
            logger.info("Telemetry already initialized, skipping...")
            return
        self.setup_tracing()
        self.setup_metrics()
        self._initialized = True
        logger.info("OpenTelemetry initialization complete")

    def get_tracer(self, name: str):
        return trace.get_tracer(name, self.service_version)

    def get_meter(self, name: str):
        return metrics.get_meter(name, self.service_version)


# Global telemetry instance
telemetry = TelemetryConfig() if os.getenv("COLLECT_METRICS", "false").lower() in ("true", "1", "yes") else NullTelemetry()
