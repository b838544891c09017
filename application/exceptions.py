"""
Application-layer exceptions.

These exceptions are shared by the training engine (backend/core), the
infrastructure adapters, and the API layer.

Insufficient history is not an error: new users have no samples,
so the engine degrades to "insufficient_data" adjustments or an empty
recommendation list instead of raising.
"""


class TrainingEngineError(Exception):
    """Base class for all training engine errors."""

    pass


class InvalidInputError(TrainingEngineError, ValueError):
    """Out-of-range input to an engine operation.

    Raised synchronously for values such as reps < 1, weight <= 0,
    adherence outside [0, 1] or a non-positive recommendation limit.
    Never retried by the engine.
    """

    pass


class RecordStoreError(TrainingEngineError):
    """Error during the atomic upsert of a personal record.

    Raised by record store adapters when the compare-and-swap could not be
    executed (RPC failure, connection error). The engine itself never
    raises this.
    """

    pass
