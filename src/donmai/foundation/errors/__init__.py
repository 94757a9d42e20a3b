"""Result variants and exceptions for donmai.

- RunOk/RunError/RunResult: the outcome and signal union
- ErrorCode/DonmaiError: exceptions for protocol misuse
"""

from .errors import DonmaiError, ErrorCode, InvalidSignalError, UnwrapError
from .result import RunError, RunOk, RunResult, is_run_result

__all__ = [
    # Result union
    "RunOk", "RunError", "RunResult", "is_run_result",
    # Exceptions
    "ErrorCode", "DonmaiError", "UnwrapError", "InvalidSignalError",
]
