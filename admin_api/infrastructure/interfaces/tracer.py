from abc import ABC, abstractmethod
import typing as t

__all__ = ["ITracer"]


F = t.TypeVar("F", bound=t.Callable[..., t.Any])

class ITracer(ABC):
    @staticmethod
    @abstractmethod
    def start_span(name: str) -> t.ContextManager[t.Any]:
        """Returns span context manager"""

    @staticmethod
    @abstractmethod
    def get_trace_id(span) -> int:
        """Extracts trace_id from the span"""

    @staticmethod
    @abstractmethod
    def traced(func: F) -> F:
        """
        Decorator that wraps a function in a tracing span named after its qualname.
        Implementations must support both sync and async functions.
        """
