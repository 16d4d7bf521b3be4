from .hasher import *
from .traces import *
from .stores import *
