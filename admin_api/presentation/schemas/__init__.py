from .alerts import *
from .users import *
