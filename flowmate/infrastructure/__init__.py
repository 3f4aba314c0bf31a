"""Infrastructure layer for FlowMate.

I/O lives here, behind the persistence gateway contract.

Exports:
    Storage:
        - PersistenceGateway: async storage contract
        - InMemoryGateway: dict-backed gateway
        - JsonFileGateway: single JSON file gateway
        - JsonStorage: low-level JSON file I/O
        - PersistenceError: raised by gateways
"""

from flowmate.infrastructure.storage import (
    FlowMateError,
    InMemoryGateway,
    JsonFileGateway,
    JsonStorage,
    PersistenceError,
    PersistenceGateway,
)

__all__ = [
    "PersistenceGateway",
    "InMemoryGateway",
    "JsonFileGateway",
    "JsonStorage",
    "FlowMateError",
    "PersistenceError",
]
