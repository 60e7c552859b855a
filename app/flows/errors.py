"""Error types raised by prompt flows.

Every failure of a flow invocation surfaces as one of these, so callers can
tell bad input apart from a bad or missing generation.
"""

from typing import Any, List, Optional


class FlowError(Exception):
    """Base class for flow failures."""

    def __init__(self, message: str, flow_name: str = ""):
        super().__init__(message)
        self.message = message
        self.flow_name = flow_name


class ValidationError(FlowError):
    """Input does not match the flow's input model. Raised before the backend is called."""

    def __init__(self, message: str, flow_name: str = "", errors: Optional[List[Any]] = None):
        super().__init__(message, flow_name)
        self.errors = errors or []


class GenerationError(FlowError):
    """The backend answered but produced no usable structured output."""


class BackendError(FlowError):
    """Transport or provider failure while calling the generative backend."""
