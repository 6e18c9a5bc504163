# ABOUTME: Fact data model, component helpers and output sinks
# ABOUTME: Shared by the template engine, the classifier and the streaming driver

from wikitaxon.facts.models import Fact, FactBuffer, RelationKind
from wikitaxon.facts.sinks import Channel, FactSink, MemoryFactSink, TsvFactWriter, memory_sinks, open_channel_writers

__all__ = [
    "Channel",
    "Fact",
    "FactBuffer",
    "FactSink",
    "MemoryFactSink",
    "RelationKind",
    "TsvFactWriter",
    "memory_sinks",
    "open_channel_writers",
]
