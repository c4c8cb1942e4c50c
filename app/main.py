from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api.vision import router as vision_router
from app.api.errors import VisionError

from contextlib import asynccontextmanager
from app.agents.vision.vision import build_vision_llm
from app.logging import configure_logging

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.vision_llm = build_vision_llm()
    yield

app = FastAPI(title="Vision Chat", version="0.1.0", lifespan=lifespan)

from app.config import settings

configure_logging(settings.LOG_LEVEL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(vision_router)


@app.exception_handler(VisionError)
async def vision_error_handler(request: Request, exc: VisionError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.get("/health")
def health():
    return {"status": "ok"}
