"""Interface adapters for FlowMate (the operator CLI)."""
