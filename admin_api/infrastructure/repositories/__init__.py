from .base import *
from .users import *
from .lookups import *
from .tenants import *
