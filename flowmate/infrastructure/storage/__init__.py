"""Storage infrastructure for FlowMate.

Provides the persistence gateway contract and two implementations:
an in-memory gateway and a single-file JSON gateway.
"""

from flowmate.infrastructure.storage.errors import FlowMateError, PersistenceError
from flowmate.infrastructure.storage.file_gateway import JsonFileGateway
from flowmate.infrastructure.storage.gateway import PersistenceGateway
from flowmate.infrastructure.storage.json_storage import JsonStorage
from flowmate.infrastructure.storage.memory_gateway import InMemoryGateway

__all__ = [
    "PersistenceGateway",
    "InMemoryGateway",
    "JsonFileGateway",
    "JsonStorage",
    "FlowMateError",
    "PersistenceError",
]
