from .resources import *
from .users import *
from .tenants import *
from .lookups import *
