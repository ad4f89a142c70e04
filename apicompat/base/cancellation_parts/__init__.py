"""Implementation modules for cooperative cancellation."""

from .cancel_request import CancelRequest
from .cancellation_token import CancellationToken
from .cancelled_error import CancelledError

__all__ = ["CancellationToken", "CancelledError", "CancelRequest"]
