from typing import Any, Dict

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, StreamingResponse
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from app.models.schemas import (
    SuggestMechanismIdeasInput, SuggestMechanismIdeasOutput, MechanismBriefRequest,
    GenerateAdCopyVariationsInput, GenerateAdCopyVariationsOutput,
    SummarizeAdResultsInput, SummarizeAdResultsOutput,
)
from app.flows.ad_copy import generate_ad_copy_variations
from app.flows.ad_results import summarize_ad_results
from app.flows.errors import BackendError, GenerationError, ValidationError
from app.flows.mechanisms import build_product_description, suggest_mechanism_ideas
from app.flows.registry import get_flow, list_flows
from app.services.flows import flow_event_generator

# Load environment variables
load_dotenv()

app = FastAPI(title="Stratlify AI API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Adjust in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"error": exc.message, "flow": exc.flow_name, "detail": exc.errors})


@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError):
    return JSONResponse(status_code=502, content={"error": exc.message, "flow": exc.flow_name})


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError):
    return JSONResponse(status_code=503, content={"error": exc.message, "flow": exc.flow_name})


@app.post("/suggest-mechanism-ideas", response_model=SuggestMechanismIdeasOutput)
async def suggest_mechanism_ideas_endpoint(request: SuggestMechanismIdeasInput):
    return await suggest_mechanism_ideas(request)

@app.post("/suggest-mechanism-ideas/from-brief", response_model=SuggestMechanismIdeasOutput)
async def suggest_mechanism_ideas_from_brief(request: MechanismBriefRequest):
    product_description = build_product_description(
        product=request.product,
        result_provided=request.resultProvided,
        method_of_delivery=request.methodOfDelivery,
        reframed_language=request.reframedLanguage,
        story_or_analogy=request.storyOrAnalogy,
    )
    return await suggest_mechanism_ideas({"productDescription": product_description})

@app.post("/generate-ad-copy-variations", response_model=GenerateAdCopyVariationsOutput)
async def generate_ad_copy_variations_endpoint(request: GenerateAdCopyVariationsInput):
    return await generate_ad_copy_variations(request)

@app.post("/summarize-ad-results", response_model=SummarizeAdResultsOutput)
async def summarize_ad_results_endpoint(request: SummarizeAdResultsInput):
    return await summarize_ad_results(request)


@app.post("/flows/{flow_name}/stream")
async def stream_flow(flow_name: str, payload: Dict[str, Any] = Body(...)):
    try:
        flow = get_flow(flow_name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown flow: {flow_name}")
    return StreamingResponse(
        flow_event_generator(flow, payload),
        media_type="text/event-stream"
    )


@app.get("/flows")
async def flows_endpoint():
    return [flow.model_dump() for flow in list_flows()]


@app.get("/health")
async def health_check():
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
