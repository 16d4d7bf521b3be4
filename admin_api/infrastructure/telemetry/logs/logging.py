import logging, sys
from pythonjsonlogger.json import JsonFormatter
from admin_api.common.config import Config
from opentelemetry import trace

__all__ = ['OTLPJsonFormatter', 'configure_logger', 'init_loggers']

JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(process)d %(message)s"
TEXT_FORMAT = "[%(asctime)s] %(levelname)-8s | %(name)s | %(message)s"


class OTLPJsonFormatter(JsonFormatter):
    """One JSON object per record: level, logger, pid, the deployment's identity and, inside a span, its ids.
    trace_provider is injectable so the formatter can be tested without a configured OTEL SDK.
    """

    def __init__(self, fmt: str = JSON_FORMAT, *args, trace_provider=None, **kwargs):
        kwargs.setdefault('rename_fields', {'levelname': 'level', 'name': 'logger', 'process': 'pid'})
        kwargs.setdefault('static_fields', {
            'service': Config.APP_NAME,
            'env': Config.MODE,
            'commit': Config.GIT_COMMIT,
        })
        super().__init__(fmt, *args, **kwargs)
        self._trace_provider = trace_provider or trace

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        context = self._trace_provider.get_current_span().get_span_context()
        if context.is_valid:
            log_record['trace_id'] = format(context.trace_id, '032x')
            log_record['span_id'] = format(context.span_id, '016x')



def configure_logger(name: str, stream=sys.stdout, level: int | str = logging.DEBUG):
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream)
    if Config.JSON_LOGS == 1:
        handler.setFormatter(OTLPJsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)

    return logger

def init_loggers():
    """Use this func to add or edit list of used loggers"""
    # 'admin_api.storage' and 'admin_api.security' propagate into the app logger
    configure_logger(Config.APP_NAME, level=Config.LOG_LEVEL)
    logging.getLogger("uvicorn.access").handlers = []
    logging.getLogger("uvicorn.access").propagate = False
