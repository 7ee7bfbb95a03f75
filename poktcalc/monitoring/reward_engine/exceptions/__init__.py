"""Custom exceptions for the parameter resolution and reward calculation system."""

from .parameter_errors import PoktCalcError, MissingParameterError, ParameterFormatError
from .provider_errors import ProviderError, StakeLookupError, TransactionDecodeError

__all__ = [
    "PoktCalcError",
    "MissingParameterError",
    "ParameterFormatError",
    "ProviderError",
    "StakeLookupError",
    "TransactionDecodeError",
]
