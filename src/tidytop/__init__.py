"""TidyTop - desktop icon organization engine.

By default, TidyTop's internal logging is disabled when used as a library.
Library users can enable logging by calling tidytop.enable_logging().
"""

from tidytop.common import disable_library_logging, enable_library_logging

disable_library_logging()

enable_logging = enable_library_logging

__all__ = [
    "enable_logging",
]
