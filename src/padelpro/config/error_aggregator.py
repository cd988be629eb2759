"""Error aggregation and reporting utilities."""

import logging
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from types import TracebackType
from typing import Optional, Set, Union

from padelpro.config.logging_config import ErrorAggregationConfig

StackTrace = Union[str, TracebackType]

@dataclass
class ErrorGroup:
    """Group of similar errors."""
    message: str
    count: int = 0
    first_seen: datetime = field(default_factory=datetime.now)
    last_seen: datetime = field(default_factory=datetime.now)
    services: Set[str] = field(default_factory=set)
    stack_traces: list[str] = field(default_factory=list)

    def update(self, service: str, stack_trace: Optional[StackTrace] = None) -> None:
        """Update error group with new occurrence."""
        self.count += 1
        self.last_seen = datetime.now()
        self.services.add(service)
        if stack_trace is None:
            return
        if isinstance(stack_trace, TracebackType):
            stack_trace = ''.join(traceback.format_tb(stack_trace))
        if stack_trace.strip() and stack_trace not in self.stack_traces:
            self.stack_traces.append(stack_trace)

class ErrorAggregator:
    """Groups repeated errors and reports them once per threshold."""

    def __init__(self, config: ErrorAggregationConfig):
        """Initialize error aggregator.

        Args:
            config: Error aggregation configuration
        """
        self._errors: dict[str, ErrorGroup] = {}
        self._config = config
        self.logger = logging.getLogger('error_aggregator')

    @property
    def pending(self) -> dict[str, ErrorGroup]:
        """Errors collected but not reported yet."""
        return dict(self._errors)

    def add_error(
        self,
        message: str,
        service: str,
        stack_trace: Optional[StackTrace] = None
    ) -> None:
        """Add error occurrence to aggregator.

        Args:
            message: Error message
            service: Service where error occurred
            stack_trace: Optional formatted stack trace or traceback object
        """
        if not self._config.enabled:
            return

        if message not in self._errors:
            self._errors[message] = ErrorGroup(message=message)
        error_group = self._errors[message]
        error_group.update(service, stack_trace)

        if (
            error_group.count >= self._config.error_threshold or
            (datetime.now() - error_group.first_seen).seconds >= self._config.time_threshold
        ):
            self._report_error_group(message, error_group)
            del self._errors[message]

    def _report_error_group(self, message: str, error_group: ErrorGroup) -> None:
        """Report a single error group."""
        self.logger.error(
            message,
            extra={
                "extra_fields": {
                    "error_count": error_group.count,
                    "services": sorted(error_group.services),
                }
            }
        )
        for trace in error_group.stack_traces:
            self.logger.debug("Stack trace:", extra={"extra_fields": {"stack_trace": trace}})

    def flush(self) -> None:
        """Report any remaining errors."""
        for message, group in self._errors.items():
            self._report_error_group(message, group)
        self._errors.clear()

# Global error aggregator instance
_error_aggregator: Optional[ErrorAggregator] = None

def init_error_aggregator(config: ErrorAggregationConfig) -> ErrorAggregator:
    """Initialize global error aggregator with configuration.

    Args:
        config: Error aggregation configuration
    """
    global _error_aggregator
    _error_aggregator = ErrorAggregator(config)
    return _error_aggregator

def get_error_aggregator() -> Optional[ErrorAggregator]:
    """Get global error aggregator instance, if one was initialized."""
    return _error_aggregator

def aggregate_error(
    message: str,
    service: str,
    stack_trace: Optional[StackTrace] = None
) -> None:
    """Add error to global aggregator.

    Does nothing until ``init_error_aggregator`` has been called, so the
    engine can be used as a plain library without logging setup.
    """
    aggregator = get_error_aggregator()
    if aggregator is not None:
        aggregator.add_error(message, service, stack_trace)
