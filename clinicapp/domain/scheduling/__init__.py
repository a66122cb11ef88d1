"""
Scheduling Domain

Interval arithmetic (time_calculator) and client double-booking detection
(overlap) used by the appointment lifecycle.
"""

from .overlap import check_for_overlap, find_overlap
from .time_calculator import format_time, intervals_overlap, to_interval

__all__ = ["check_for_overlap", "find_overlap", "format_time", "intervals_overlap", "to_interval"]
