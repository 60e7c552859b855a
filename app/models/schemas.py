from enum import Enum
from typing import Annotated, List

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

MAX_TEXT_CHARS = 8000
MAX_PERFORMANCE_DATA_CHARS = 50000
MAX_AD_COPY_VARIATIONS = 10


def require_text(value: str) -> str:
    """Reject blank or whitespace-only text. The value itself is left untouched."""
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(require_text)]


class FlowInput(BaseModel):
    """Base for flow inputs. Strict: "5" is not an int and 5 is not a str."""

    model_config = ConfigDict(strict=True)


class HarmCategory(str, Enum):
    DANGEROUS_CONTENT = "HARM_CATEGORY_DANGEROUS_CONTENT"
    HARASSMENT = "HARM_CATEGORY_HARASSMENT"
    SEXUALLY_EXPLICIT = "HARM_CATEGORY_SEXUALLY_EXPLICIT"
    HATE_SPEECH = "HARM_CATEGORY_HATE_SPEECH"


class HarmBlockThreshold(str, Enum):
    BLOCK_NONE = "BLOCK_NONE"
    BLOCK_ONLY_HIGH = "BLOCK_ONLY_HIGH"
    BLOCK_MEDIUM_AND_ABOVE = "BLOCK_MEDIUM_AND_ABOVE"
    BLOCK_LOW_AND_ABOVE = "BLOCK_LOW_AND_ABOVE"


class SafetySetting(BaseModel):
    """Block generations whose harm score in `category` reaches `threshold`."""

    category: HarmCategory
    threshold: HarmBlockThreshold


# --- Suggest mechanism ideas ---

class SuggestMechanismIdeasInput(FlowInput):
    productDescription: NonBlankStr = Field(
        ...,
        max_length=MAX_TEXT_CHARS,
        description="A detailed description of the product, its features, and benefits.",
    )


class SuggestMechanismIdeasOutput(BaseModel):
    suggestedMechanisms: List[str] = Field(
        ..., description="A list of suggested unique mechanisms behind the product."
    )


class MechanismBriefRequest(BaseModel):
    """Fields of the mechanization worksheet used to describe a product."""

    product: NonBlankStr = Field(..., max_length=MAX_TEXT_CHARS)
    resultProvided: NonBlankStr = Field(..., max_length=MAX_TEXT_CHARS)
    methodOfDelivery: str = Field("", max_length=MAX_TEXT_CHARS)
    reframedLanguage: str = Field("", max_length=MAX_TEXT_CHARS)
    storyOrAnalogy: str = Field("", max_length=MAX_TEXT_CHARS)


# --- Generate ad copy variations ---

class GenerateAdCopyVariationsInput(FlowInput):
    adConcept: str = Field(..., max_length=MAX_TEXT_CHARS, description="The initial ad concept.")
    productDescription: str = Field(..., max_length=MAX_TEXT_CHARS, description="The description of the product.")
    desiredEmotion: str = Field(..., max_length=MAX_TEXT_CHARS, description="The emotion the ad should evoke.")
    targetAudience: str = Field(..., max_length=MAX_TEXT_CHARS, description="The target audience for the ad.")
    numberOfVariations: int = Field(
        3,
        ge=1,
        le=MAX_AD_COPY_VARIATIONS,
        description="The number of ad copy variations to generate.",
    )


class AdCopyVariation(BaseModel):
    headline: str = Field(..., description="The generated headline for the ad.")
    bodyCopy: str = Field(..., description="The generated body copy for the ad.")
    callToAction: str = Field(..., description="The generated call to action for the ad.")


class GenerateAdCopyVariationsOutput(BaseModel):
    variations: List[AdCopyVariation] = Field(..., description="The generated ad copy variations.")


# --- Summarize ad results ---

class SummarizeAdResultsInput(FlowInput):
    adPerformanceData: NonBlankStr = Field(
        ...,
        max_length=MAX_PERFORMANCE_DATA_CHARS,
        description="The ad performance data in CSV or JSON format.",
    )


class SummarizeAdResultsOutput(BaseModel):
    summary: str = Field(..., description="A summary of the key findings from the ad performance data.")
    suggestions: str = Field(
        ..., description="Suggestions for areas of improvement based on the ad performance data."
    )


# --- API ---

class FlowDescription(BaseModel):
    name: str
    inputSchema: dict
    outputSchema: dict
