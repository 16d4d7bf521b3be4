from .sqla_manager import *
from .sqla_uow import *
from .query_builder import *
from .conflicts import *
