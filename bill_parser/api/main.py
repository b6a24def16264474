from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from ..core.logging import setup_logging
from ..core.config import settings
from ..core.errors import BillFlowError
from .routers import capture, edit, health

logger = setup_logging()
app = FastAPI(title="Smart Bill Parser")

# HTTP status per error kind; MalformedStoredDocument never reaches here
ERROR_STATUS = {
    "InvalidFileType": status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    "NoFileSelected": status.HTTP_400_BAD_REQUEST,
    "UploadInProgress": status.HTTP_409_CONFLICT,
    "ParseFailed": status.HTTP_502_BAD_GATEWAY,
    "TransportFault": status.HTTP_504_GATEWAY_TIMEOUT,
    "OutOfRange": status.HTTP_404_NOT_FOUND,
    "NoDocumentLoaded": status.HTTP_409_CONFLICT,
}


@app.exception_handler(BillFlowError)
async def bill_flow_exception_handler(request: Request, exc: BillFlowError):
    logger.warning(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST),
        content={"error": exc.message, "kind": exc.kind},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Validation error: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors())},
    )


# CORS_ORIGINS can be set in .env as comma-separated list
allowed_origins = [origin.strip() for origin in settings.cors_origins.split(",")]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(capture.router)
app.include_router(edit.router)
