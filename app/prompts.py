# Prompt templates for the Stratlify AI flows.
# {{name}} is HTML-escaped on render, {{{name}}} is inserted raw.

SUGGEST_MECHANISM_IDEAS_PROMPT = """You are an expert marketing strategist specializing in identifying the unique mechanisms behind products.

Given the following product description, suggest a list of unique mechanisms that explain how the product delivers its benefits.
Each mechanism should be a concise and compelling statement.

Product Description: {{{productDescription}}}

Suggested Mechanisms:"""

GENERATE_AD_COPY_VARIATIONS_PROMPT = """You are an expert advertising copywriter. Generate {{numberOfVariations}} variations of ad copy based on the following ad concept, product description, desired emotion, and target audience.

Ad Concept: {{{adConcept}}}
Product Description: {{{productDescription}}}
Desired Emotion: {{{desiredEmotion}}}
Target Audience: {{{targetAudience}}}

Each variation should include a headline, body copy, and call to action. Be creative and think outside the box.

Output should be in JSON format.
"""

SUMMARIZE_AD_RESULTS_PROMPT = """You are a marketing analyst. Summarize the key findings from the ad performance data below and suggest areas for improvement.

Ad Performance Data:
{{{adPerformanceData}}}"""

# Mirrors the mechanization worksheet: every field is labelled, blanks included.
MECHANISM_BRIEF_TEMPLATE = (
    "Product: {product}. Result Provided: {result_provided}. "
    "Method of Delivery: {method_of_delivery}. "
    "Current ideas for reframing: {reframed_language}. "
    "Potential story/analogy: {story_or_analogy}."
)
