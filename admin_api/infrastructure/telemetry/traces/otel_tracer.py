from opentelemetry import trace
import admin_api.infrastructure.interfaces as iabc
import contextlib, typing as t, functools, inspect

__all__ = ['OTELTracer']

F = t.TypeVar("F", bound=t.Callable[..., t.Any])


def _span_attributes(func) -> dict[str, str]:
    return {'code.function': func.__qualname__, 'code.namespace': func.__module__}


class OTELTracer(iabc.ITracer):
    '''Thin wrapper over the global OTEL tracer provider. Without a configured SDK every span is a no-op'''

    def __init__(self, tracer_name: str):
        self._tracer = trace.get_tracer(tracer_name)

    @property
    def tracer(self):
        return self._tracer

    @staticmethod
    @contextlib.contextmanager
    def start_span(name: str):
        with trace.get_tracer(__name__).start_as_current_span(name) as span:
            yield span

    @staticmethod
    def get_trace_id(span) -> int:
        return span.get_span_context().trace_id

    @staticmethod
    def traced(func: F) -> F:
        # start_as_current_span records the exception and marks the span as failed on its own
        tracer = trace.get_tracer(func.__module__)
        attributes = _span_attributes(func)

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                with tracer.start_as_current_span(func.__qualname__, attributes=attributes):
                    return await func(*args, **kwargs)
            return t.cast(F, async_wrapper)

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            with tracer.start_as_current_span(func.__qualname__, attributes=attributes):
                return func(*args, **kwargs)
        return t.cast(F, sync_wrapper)
