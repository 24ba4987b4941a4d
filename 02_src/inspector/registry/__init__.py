"""Tracker registry module."""

from .registry import ITrackerRegistry, TrackerRegistry

__all__ = ["ITrackerRegistry", "TrackerRegistry"]
