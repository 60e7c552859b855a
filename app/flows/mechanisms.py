"""Suggest unique mechanisms that explain how a product delivers its benefits."""

from typing import Any, Dict, Union

from app.flows.engine import PromptFlow
from app.flows.errors import ValidationError
from app.models.schemas import (
    HarmBlockThreshold,
    HarmCategory,
    SafetySetting,
    SuggestMechanismIdeasInput,
    SuggestMechanismIdeasOutput,
    require_text,
)
from app.prompts import MECHANISM_BRIEF_TEMPLATE, SUGGEST_MECHANISM_IDEAS_PROMPT

MECHANISM_SAFETY_SETTINGS = [
    SafetySetting(category=HarmCategory.DANGEROUS_CONTENT, threshold=HarmBlockThreshold.BLOCK_ONLY_HIGH),
    SafetySetting(category=HarmCategory.HARASSMENT, threshold=HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE),
    SafetySetting(category=HarmCategory.SEXUALLY_EXPLICIT, threshold=HarmBlockThreshold.BLOCK_LOW_AND_ABOVE),
]

suggest_mechanism_ideas_flow = PromptFlow(
    name="suggestMechanismIdeasFlow",
    input_model=SuggestMechanismIdeasInput,
    output_model=SuggestMechanismIdeasOutput,
    template=SUGGEST_MECHANISM_IDEAS_PROMPT,
    safety_settings=MECHANISM_SAFETY_SETTINGS,
)


async def suggest_mechanism_ideas(
    payload: Union[SuggestMechanismIdeasInput, Dict[str, Any]],
) -> SuggestMechanismIdeasOutput:
    return await suggest_mechanism_ideas_flow.invoke(payload)


def build_product_description(
    product: str,
    result_provided: str,
    method_of_delivery: str = "",
    reframed_language: str = "",
    story_or_analogy: str = "",
) -> str:
    """Compose a product description from the mechanization worksheet fields.

    Product and result provided are required; the rest may be blank.
    """
    try:
        require_text(product)
        require_text(result_provided)
    except ValueError as e:
        raise ValidationError(
            "Product and result provided are required to suggest mechanisms.",
            flow_name=suggest_mechanism_ideas_flow.name,
        ) from e

    return MECHANISM_BRIEF_TEMPLATE.format(
        product=product,
        result_provided=result_provided,
        method_of_delivery=method_of_delivery,
        reframed_language=reframed_language,
        story_or_analogy=story_or_analogy,
    )
