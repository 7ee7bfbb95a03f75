"""Uniform wrapping of provider failures."""

from typing import Any, Callable, TypeVar
import bittensor as bt

from ..exceptions import PoktCalcError, ProviderError

T = TypeVar("T")


def call_provider(operation: str, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Invoke a provider method, re-raising transport or decoding failures as
    ProviderError tagged with the calling operation.

    Errors already raised by this package pass through untouched.
    """
    try:
        return func(*args, **kwargs)
    except PoktCalcError:
        raise
    except Exception as e:
        bt.logging.debug(f"Provider call failed during {operation}: {e}")
        raise ProviderError(operation, e) from e
