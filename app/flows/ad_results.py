"""Summarize ad performance data and suggest improvements."""

from typing import Any, Dict, Union

from app.flows.engine import PromptFlow
from app.models.schemas import SummarizeAdResultsInput, SummarizeAdResultsOutput
from app.prompts import SUMMARIZE_AD_RESULTS_PROMPT

summarize_ad_results_flow = PromptFlow(
    name="summarizeAdResultsFlow",
    input_model=SummarizeAdResultsInput,
    output_model=SummarizeAdResultsOutput,
    template=SUMMARIZE_AD_RESULTS_PROMPT,
)


async def summarize_ad_results(
    payload: Union[SummarizeAdResultsInput, Dict[str, Any]],
) -> SummarizeAdResultsOutput:
    return await summarize_ad_results_flow.invoke(payload)
