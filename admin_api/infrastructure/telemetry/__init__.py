from opentelemetry import trace as otel_trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
import os
from admin_api.common.config import Config




def setup_opentelemetry(app, engine=None):
    resource = Resource.create({
        "service.name": Config.OTEL_SERVICE_NAME,
        "service.version": Config.GIT_COMMIT,
        "process.pid": os.getpid(),
        "service.instance.id": f"worker-{os.getpid()}",
        })

    span_exporter = OTLPSpanExporter(endpoint=Config.OTEL_GRPC_ENDPOINT, insecure=True)
    tracer = TracerProvider(resource=resource)
    tracer.add_span_processor(BatchSpanProcessor(span_exporter))
    otel_trace.set_tracer_provider(tracer)

    FastAPIInstrumentor.instrument_app(app, exclude_spans=['receive', 'send'])
    if engine is not None:
        # async engines are instrumented through their sync core
        SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)
