"""
Callback interface for extractor progress reporting.
"""

from __future__ import annotations

from typing import Protocol

from core.logging import get_logger

LOGGER = get_logger("extractors.callbacks")


class ExtractorCallbacks(Protocol):
    """
    Callback interface for extractor progress reporting.

    Modules call these methods to report progress, logs, and errors.
    Implementations can be synchronous (CLI, tests) or forward to a host
    application's job layer.
    """

    def on_progress(self, current: int, total: int, message: str = "") -> None:
        """
        Report progress.

        Args:
            current: Current item/step (0-based)
            total: Total items/steps
            message: Optional status message

        Example:
            callbacks.on_progress(2, 4, "Parsing Calls.txt")
        """
        ...

    def on_log(self, message: str, level: str = "info") -> None:
        """
        Log a message.

        Args:
            message: Log message
            level: "debug" | "info" | "warning" | "error"
        """
        ...

    def on_error(self, error: str, details: str = "") -> None:
        """
        Report an error.

        Args:
            error: Short error message
            details: Detailed error information (traceback, etc.)
        """
        ...

    def on_step(self, step_name: str) -> None:
        """
        Report entering a new processing step.

        Example:
            callbacks.on_step("Parsing Messages-SMS.txt")
        """
        ...

    def is_cancelled(self) -> bool:
        """
        Check if the host cancelled the operation.

        Checked between report files only; a report is never interrupted
        mid-entity.
        """
        ...


class LoggingCallbacks:
    """ExtractorCallbacks implementation that writes everything to the log."""

    def __init__(self) -> None:
        self.cancelled = False

    def on_progress(self, current: int, total: int, message: str = "") -> None:
        LOGGER.info("[%d/%d] %s", current, total, message)

    def on_log(self, message: str, level: str = "info") -> None:
        log_level = {
            "debug": 10,
            "info": 20,
            "warning": 30,
            "error": 40,
        }.get(level, 20)
        LOGGER.log(log_level, message)

    def on_error(self, error: str, details: str = "") -> None:
        if details:
            LOGGER.error("%s\n%s", error, details)
        else:
            LOGGER.error(error)

    def on_step(self, step_name: str) -> None:
        LOGGER.info(step_name)

    def is_cancelled(self) -> bool:
        return self.cancelled
