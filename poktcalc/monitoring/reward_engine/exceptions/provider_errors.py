"""Custom exceptions for provider and node-state failures."""

from .parameter_errors import PoktCalcError


class ProviderError(PoktCalcError):
    """Raised when a provider call fails; names the operation that made it."""

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {cause}")


class StakeLookupError(PoktCalcError):
    """Raised when a servicer's staked balance at a height cannot be read."""

    def __init__(self, address: str, height: int, reason: str = ""):
        self.address = address
        self.height = height
        self.reason = reason
        message = f"stake lookup failed for {address} at height {height}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class TransactionDecodeError(PoktCalcError):
    """Raised when a raw provider record cannot be decoded."""

    def __init__(self, field: str, value, reason: str = ""):
        self.field = field
        self.value = value
        message = f"cannot decode field '{field}' from {value!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
