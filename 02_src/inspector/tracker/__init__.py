"""Tracker module."""

from .tracker import ITracker, Tracker, TrackerObserver, format_log_time

__all__ = ["ITracker", "Tracker", "TrackerObserver", "format_log_time"]
