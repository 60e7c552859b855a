from typing import Dict, List

from app.flows.ad_copy import generate_ad_copy_variations_flow
from app.flows.ad_results import summarize_ad_results_flow
from app.flows.engine import PromptFlow
from app.flows.mechanisms import suggest_mechanism_ideas_flow
from app.models.schemas import FlowDescription

FLOWS: Dict[str, PromptFlow] = {
    flow.name: flow
    for flow in (
        suggest_mechanism_ideas_flow,
        generate_ad_copy_variations_flow,
        summarize_ad_results_flow,
    )
}


def get_flow(name: str) -> PromptFlow:
    """Look up a flow by name. Raises KeyError for unknown names."""
    try:
        return FLOWS[name]
    except KeyError:
        raise KeyError(f"Unknown flow: {name}") from None


def list_flows() -> List[FlowDescription]:
    return [
        FlowDescription(
            name=flow.name,
            inputSchema=flow.input_model.model_json_schema(),
            outputSchema=flow.output_model.model_json_schema(),
        )
        for flow in FLOWS.values()
    ]
