from .tenants import *
from .users import *
