from .logging import *
