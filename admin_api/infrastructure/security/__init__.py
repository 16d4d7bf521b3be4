from .passwords import *
from .deny_list import *
from .tokens import *
