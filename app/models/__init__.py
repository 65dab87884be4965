# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import time_event, comp_event, login_code

# Explicit class exports for cleaner imports
from .time_event import TimeEvent, TimeEventKind
from .comp_event import CompEvent, CompUnit
from .login_code import LoginCode

__all__ = [
    "TimeEvent",
    "TimeEventKind",
    "CompEvent",
    "CompUnit",
    "LoginCode",
]
