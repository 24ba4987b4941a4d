"""Event bus data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Topic(str, Enum):
    """EventBus topics, one per instrumentation event kind."""

    REGISTER = "register"
    ACTIONS = "actions"
    OBSERVE = "observe"
    ACTION = "action"
    PATCH = "patch"
    SNAPSHOT = "snapshot"
    VALUE = "value"
    UPDATED = "updated"


@dataclass
class BusMessage:
    """A message exchanged through EventBus."""

    id: str
    topic: Topic
    payload: dict  # varies by topic
    source: str  # producer that published
    timestamp: datetime
