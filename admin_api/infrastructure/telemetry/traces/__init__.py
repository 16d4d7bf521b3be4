from .otel_tracer import *

# Swap the implementation here, repositories decorate with TracerType.traced
TracerType = OTELTracer
