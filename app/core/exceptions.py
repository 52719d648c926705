"""
Error types shared by the shadow engine, the budget store and the routers.
"""


class InvalidInput(ValueError):
    """Raised when a budget request cannot be simulated as given."""


class PersistenceFailure(RuntimeError):
    """Raised by the budget store when DynamoDB rejects a read or write."""
