import json
import time
import logging
import uuid
from typing import Optional
from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST, REGISTRY

from agent import ToolCallingOrchestrator
from base import WeatherAPIBase
from config.settings import settings
from llm.openai_client import LLMClient
from models import ChatReply, ChatRequest, TranscriptionResponse
from utils import get_api_class


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "level": record.levelname,
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
            "msg": record.getMessage(),
            "logger": record.name,
        }
        if hasattr(record, "extra_data"):
            base.update(getattr(record, "extra_data"))
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


handler = logging.StreamHandler()
if settings.logging.json_logging:
    handler.setFormatter(JsonFormatter())
else:
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
logger = logging.getLogger("app")
logger.setLevel(settings.logging.level)
logger.addHandler(handler)
logger.propagate = False

REQUEST_COUNTER: Optional[Counter] = None
REQUEST_LATENCY: Optional[Histogram] = None
WEATHER_LOOKUPS: Optional[Counter] = None


def init_metrics(registry=REGISTRY) -> None:
    global REQUEST_COUNTER, REQUEST_LATENCY, WEATHER_LOOKUPS
    if REQUEST_COUNTER is None:
        REQUEST_COUNTER = Counter(
            "chat_requests_total",
            "Total requests per endpoint",
            ["endpoint", "status"],
            registry=registry,
        )
    if REQUEST_LATENCY is None:
        REQUEST_LATENCY = Histogram(
            "chat_request_seconds",
            "Latency of requests in seconds",
            ["endpoint"],
            registry=registry,
        )
    if WEATHER_LOOKUPS is None:
        WEATHER_LOOKUPS = Counter(
            "weather_lookups_total",
            "Weather tool invocations",
            ["outcome"],
            registry=registry,
        )


# Process-wide provider clients, handed to the handlers through Depends
llm_client = LLMClient()
weather_api: WeatherAPIBase = get_api_class(settings.modules.weather_api_name)()


def get_llm_client() -> LLMClient:
    return llm_client


def get_weather_api() -> WeatherAPIBase:
    return weather_api


app = FastAPI(title="Japan Travel Assistant", version="1.0.0")


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    # a `file` field that is not an upload (e.g. a plain string) counts as no file
    if request.url.path == "/v1/transcribe" and any(tuple(err.get("loc", ()))[-1:] == ("file",) for err in errors):
        return JSONResponse(status_code=400, content={"error": "No file uploaded"})
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": str(errors)})


@app.get("/healthz", response_class=PlainTextResponse)
def healthz():
    return "ok"


@app.get("/metrics")
def metrics():
    return PlainTextResponse(generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.post("/v1/chat", response_model=ChatReply)
def chat(
    req: ChatRequest,
    llm: LLMClient = Depends(get_llm_client),
    weather: WeatherAPIBase = Depends(get_weather_api),
):
    init_metrics()
    request_id = str(uuid.uuid4())
    start = time.time()

    orch = ToolCallingOrchestrator(llm, weather)
    status = "500"
    try:
        resp = orch.handle(request_id, req.messages, req.language)
        status = "200"
        logger.info(
            "Handled chat",
            extra={"extra_data": {"request_id": request_id, "agent": orch.name, "weather_fetched": resp.weather_fetched}}
        )
        return JSONResponse(status_code=200, content=resp.model_dump(by_alias=True, exclude_none=True))
    except Exception as e:
        logger.exception("Chat error", extra={"extra_data": {"request_id": request_id, "agent": orch.name}})
        return JSONResponse(status_code=500, content={"error": "Failed to process chat", "details": str(e)})
    finally:
        # lookups made before a later failure still count
        for call in orch.tool_calls:
            WEATHER_LOOKUPS.labels(outcome="success" if call["result"]["ok"] else "failure").inc()
        REQUEST_COUNTER.labels(endpoint="chat", status=status).inc()
        REQUEST_LATENCY.labels(endpoint="chat").observe(time.time() - start)


@app.post("/v1/transcribe", response_model=TranscriptionResponse)
def transcribe(
    file: Optional[UploadFile] = File(None),
    language: Optional[str] = Form(None),
    llm: LLMClient = Depends(get_llm_client),
):
    init_metrics()
    request_id = str(uuid.uuid4())
    start = time.time()
    extra = {"extra_data": {"request_id": request_id, "agent": "Transcription"}}

    if file is None:
        REQUEST_COUNTER.labels(endpoint="transcribe", status="400").inc()
        logger.warning("No 'file' field in upload", extra=extra)
        return JSONResponse(status_code=400, content={"error": "No file uploaded"})

    content = file.file.read()
    logger.info(f"Received audio {file.filename!r} ({file.content_type}, {len(content) / 1024:.2f} KB)", extra=extra)
    if not content:
        REQUEST_COUNTER.labels(endpoint="transcribe", status="400").inc()
        logger.warning("Empty audio upload", extra=extra)
        return JSONResponse(status_code=400, content={"error": "Empty file received"})

    try:
        text = llm.transcribe(
            file.filename or "voice.webm",
            content,
            file.content_type,
            language or settings.transcription.default_language,
        )
    except Exception as e:
        REQUEST_COUNTER.labels(endpoint="transcribe", status="500").inc()
        REQUEST_LATENCY.labels(endpoint="transcribe").observe(time.time() - start)
        logger.exception("Transcription failed", extra=extra)
        return JSONResponse(status_code=500, content={"error": "Transcription failed", "details": str(e)})

    REQUEST_COUNTER.labels(endpoint="transcribe", status="200").inc()
    REQUEST_LATENCY.labels(endpoint="transcribe").observe(time.time() - start)
    return JSONResponse(status_code=200, content=TranscriptionResponse(text=text).model_dump())
