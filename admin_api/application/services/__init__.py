from .resources import *
from .users import *
