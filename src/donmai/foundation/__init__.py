"""Foundation layer: result variants, exceptions and configuration."""

from .config import DonmaiSettings, LoggingSettings, RetrySettings, clear_settings_cache, get_settings
from .errors import DonmaiError, ErrorCode, InvalidSignalError, RunError, RunOk, RunResult, UnwrapError, is_run_result

__all__ = [
    "RunOk", "RunError", "RunResult", "is_run_result",
    "ErrorCode", "DonmaiError", "UnwrapError", "InvalidSignalError",
    "DonmaiSettings", "RetrySettings", "LoggingSettings", "get_settings", "clear_settings_cache",
]
