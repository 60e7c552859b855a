"""Generate ad copy variations from an ad concept."""

import logging
from typing import Any, Dict, Union

from app.flows.engine import PromptFlow
from app.models.schemas import GenerateAdCopyVariationsInput, GenerateAdCopyVariationsOutput
from app.prompts import GENERATE_AD_COPY_VARIATIONS_PROMPT

logger = logging.getLogger(__name__)

generate_ad_copy_variations_flow = PromptFlow(
    name="generateAdCopyVariationsFlow",
    input_model=GenerateAdCopyVariationsInput,
    output_model=GenerateAdCopyVariationsOutput,
    template=GENERATE_AD_COPY_VARIATIONS_PROMPT,
)


async def generate_ad_copy_variations(
    payload: Union[GenerateAdCopyVariationsInput, Dict[str, Any]],
) -> GenerateAdCopyVariationsOutput:
    validated = generate_ad_copy_variations_flow.validate_input(payload)
    output = await generate_ad_copy_variations_flow.invoke(validated)

    if len(output.variations) != validated.numberOfVariations:
        logger.warning(
            f"Requested {validated.numberOfVariations} ad copy variations, got {len(output.variations)}"
        )
    return output
