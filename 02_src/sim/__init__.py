"""Scripted instrumentation producer."""

from .sim import ISim, Sim

__all__ = ["ISim", "Sim"]
