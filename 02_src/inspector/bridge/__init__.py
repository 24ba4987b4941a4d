"""Instrumentation bridge module."""

from .bridge import IInstrumentationBridge, InstrumentationBridge

__all__ = ["IInstrumentationBridge", "InstrumentationBridge"]
