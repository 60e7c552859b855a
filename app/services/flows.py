import logging
from typing import Any, AsyncGenerator, Dict

from app.flows.engine import PromptFlow
from app.flows.errors import FlowError, ValidationError
from app.utils.sse import sse_event

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def flow_event_generator(flow: PromptFlow, payload: Dict[str, Any]) -> AsyncGenerator[str, None]:
    """
    Run a single flow invocation and report it as SSE events.

    Flow:
    1. Validate input (error event on failure, backend never called)
    2. Call the backend
    3. Emit done with the validated result, or error with the error type
    """
    yield sse_event("status", status="validating", flow=flow.name)
    try:
        validated = flow.validate_input(payload)
    except ValidationError as e:
        yield sse_event("error", error=e.message, errorType=type(e).__name__, details=e.errors)
        return

    yield sse_event("status", status="generating", flow=flow.name)
    try:
        result = await flow.invoke(validated)
    except FlowError as e:
        logger.error(f"Flow {flow.name} failed: {e}")
        yield sse_event("error", error=e.message, errorType=type(e).__name__)
        return
    except Exception as e:
        logger.error(f"Unexpected error in flow {flow.name}: {e}")
        yield sse_event("error", error=str(e), errorType="UnexpectedError")
        return

    yield sse_event("done", result=result)
