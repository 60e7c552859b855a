import json

from pydantic import BaseModel


def _encode(value):
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def sse_event(event_type: str, **kwargs) -> str:
    """Format a Server-Sent Event data line.

    Pydantic models among the fields are dumped to JSON, so flow results can be
    passed as-is:
        yield sse_event("status", status="generating", flow="summarizeAdResultsFlow")
        yield sse_event("done", result=output)
        yield sse_event("error", error="Something went wrong", errorType="GenerationError")
    """
    payload = {"type": event_type, **kwargs}
    return f"data: {json.dumps(payload, ensure_ascii=False, default=_encode)}\n\n"
