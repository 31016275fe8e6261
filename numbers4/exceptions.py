"""
Numbers4 Engine Errors
======================

Error taxonomy shared by the prediction models, the ensemble and the
backtest simulator.
"""


class Numbers4Error(Exception):
    """Base class for all engine errors."""


class InsufficientDataError(Numbers4Error):
    """Raised when a model does not receive the minimum input it needs."""

    def __init__(self, message: str, required: int = 0, available: int = 0):
        super().__init__(message)
        self.required = required
        self.available = available


class MalformedDrawError(Numbers4Error, ValueError):
    """Raised when a winning number is not exactly four digit characters."""

    def __init__(self, value):
        super().__init__(f"Winning number must be 4 digit characters, got {value!r}")
        self.value = value


class UnknownAlgorithmError(Numbers4Error, KeyError):
    """Raised when a backtest names an algorithm the engine does not provide."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Unknown algorithm: {self.name}"
