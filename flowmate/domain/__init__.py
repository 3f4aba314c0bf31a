"""FlowMate domain layer: pure models and operations, no I/O."""
