"""Custom exceptions for protocol parameter resolution errors."""


class PoktCalcError(Exception):
    """Base exception for all reward calculation errors."""
    pass


class MissingParameterError(PoktCalcError):
    """Raised when a parameter is found neither in the batch nor on chain."""

    def __init__(self, key: str, height: int):
        self.key = key
        self.height = height
        super().__init__(f"parameter '{key}' not found at height {height}")


class ParameterFormatError(PoktCalcError):
    """Raised when a parameter value cannot be parsed into its numeric type."""

    def __init__(self, key: str, value: str, reason: str = ""):
        self.key = key
        self.value = value
        self.reason = reason
        message = f"failed to parse parameter '{key}' value {value!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
