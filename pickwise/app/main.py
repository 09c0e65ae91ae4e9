import logging
import time
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from pickwise.app.errors import ComparisonError
from pickwise.app.logging import configure_logging
from pickwise.app.schemas import (
    CompareRequest,
    CompareResponse,
    ErrorMessage,
    PlaceholderExamples,
    SearchRequest,
)
from pickwise.app.settings import settings
from pickwise.app.storage import MemStorage, storage
from pickwise.observability.langsmith import configure_tracing
from pickwise.orchestration.graph import build_workflow
from pickwise.orchestration.placeholders import generate_placeholder_examples
from pickwise.prompts.placeholder_prompt import FALLBACK_EXAMPLES

configure_logging()
configure_tracing()

app = FastAPI(title="PickWise Comparison API")

# Serve static files (comparison UI)
static_dir = Path(__file__).parent.parent.parent / "static"
if static_dir.exists():
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
workflow = build_workflow()
logger = logging.getLogger(__name__)


def get_workflow():
    return workflow


def get_storage() -> MemStorage:
    return storage


@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    errors = "; ".join(err.get("msg", "invalid value") for err in exc.errors())
    return JSONResponse(status_code=400, content={"message": f"Invalid request: {errors}"})


@app.exception_handler(ComparisonError)
async def comparison_failed(request: Request, exc: ComparisonError):
    logger.warning("Comparison failed on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=400,
        content={"message": f"Failed to generate product comparison: {exc}"},
    )


@app.post("/api/compare", response_model=CompareResponse, responses={400: {"model": ErrorMessage}})
def compare(
    payload: CompareRequest,
    wf=Depends(get_workflow),
    store: MemStorage = Depends(get_storage),
):
    search = store.create_search_request(payload)
    try:
        result = wf.invoke(
            {
                "request": payload,
                "meta": {"start_time_ms": int(time.time() * 1000), "search_id": search.id},
                "tool_calls": [],
            }
        )
    except ComparisonError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("compare handler failed for search %s", search.id)
        return JSONResponse(
            status_code=400,
            content={"message": f"Failed to generate product comparison: {exc}"},
        )

    products = result.get("products") or []
    store.update_search_request_results(search.id, products)
    return CompareResponse(
        id=search.id,
        products=products,
        features=result.get("features") or [],
        message=result.get("message"),
    )


@app.get("/api/compare/{request_id}", response_model=SearchRequest, responses={404: {"model": ErrorMessage}})
def get_comparison(request_id: str, store: MemStorage = Depends(get_storage)):
    try:
        search = store.get_search_request(int(request_id))
    except ValueError:
        search = None
    if search is None:
        return JSONResponse(status_code=404, content={"message": "Comparison not found"})
    return search


@app.get("/api/placeholder-examples", response_model=PlaceholderExamples)
def placeholder_examples():
    try:
        examples = generate_placeholder_examples()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Placeholder generation failed, serving fallback examples: %s", exc)
        examples = list(FALLBACK_EXAMPLES)
    return PlaceholderExamples(examples=examples)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/")
async def root():
    """Serve the comparison UI."""
    ui_path = static_dir / "index.html"
    if ui_path.exists():
        return FileResponse(ui_path)
    return {"message": "Comparison UI not found. Use POST /api/compare."}


def run() -> None:
    import uvicorn

    uvicorn.run("pickwise.app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
