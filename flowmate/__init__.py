"""FlowMate - a single-user task board with rule-based automation.

The package is layered the usual way:

- domain: pure models and functions (no I/O)
- application: the stateful board owner and its subscribers
- infrastructure: persistence gateways
- interfaces: the operator CLI
"""

__version__ = "0.1.0"
