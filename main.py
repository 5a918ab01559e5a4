import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from errors import AppError

# Routers
from routers.health import router as health_router
from routers.problems import router as problems_router
from routers.submissions import router as submissions_router

logger = logging.getLogger("math-practice")
logging.basicConfig(level=logging.INFO)

# Next.js dev server by default; production sets CORS_ORIGINS
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]

app = FastAPI(title="Math Practice API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Bad input messages, keyed by path
_INVALID_INPUT = {
    "/problem": "Invalid difficulty. Expected one of Easy, Medium, Hard.",
    "/submission": "Invalid session ID or answer format.",
}


# All failures leave the API as a flat {"error": str}; callers only look at the status.
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("%s %s invalid body: %s", request.method, request.url.path, exc.errors())
    message = _INVALID_INPUT.get(request.url.path, "Invalid request.")
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("%s %s crashed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": AppError.message})


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(problems_router)  # POST /problem
app.include_router(submissions_router)  # POST /submission
app.include_router(health_router)  # /health/...
