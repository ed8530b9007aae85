from .actor import Actor
from .time_range import TimeRange

__all__ = ["Actor", "TimeRange"]
