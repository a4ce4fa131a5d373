from .error_boundary import handle_async_error, normalize_error, with_error_handling
from .retry import (
    compute_backoff_delay,
    error_code_of,
    error_status_of,
    is_error_retryable,
    with_retry,
)

__all__ = [
    "compute_backoff_delay",
    "error_code_of",
    "error_status_of",
    "handle_async_error",
    "is_error_retryable",
    "normalize_error",
    "with_error_handling",
    "with_retry",
]
