"""
Loggers of the engine API types.

The codec only emits debug and verbose records (rejected decode candidates,
binary decode failures, bundle draining). Where those records go is left to
the application embedding the codec.
"""

import logging
from typing import Any, Optional, Union, cast

# Custom log levels
VERBOSE_LEVEL = 15  # Between DEBUG (10) and INFO (20)

logging.addLevelName(VERBOSE_LEVEL, "VERBOSE")


class EngineLogger(logging.Logger):
    """Define custom log levels via a dedicated Logger class."""

    def verbose(
        self,
        msg: object,
        *args: Any,
        exc_info: Union[BaseException, bool, None] = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        extra: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Log a message with VERBOSE level severity (15).

        This level is between DEBUG (10) and INFO (20), intended for messages
        more detailed than INFO but less verbose than DEBUG.
        """
        if self.isEnabledFor(VERBOSE_LEVEL):
            self._log(VERBOSE_LEVEL, msg, args, exc_info, extra, stack_info, stacklevel)


# Register the custom logger class
logging.setLoggerClass(EngineLogger)


def get_logger(name: str) -> EngineLogger:
    """Get a properly-typed logger with the custom logging levels."""
    return cast(EngineLogger, logging.getLogger(name))
