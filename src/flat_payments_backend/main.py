'''
FastAPI application: wiring of routers, CORS and the domain error handlers.
'''
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from .database.engine import create_db_engine_and_session_factory, dispose_db_engine
from .common.logger import log
from .common.config import settings
from .common.exceptions import (
    AlreadyPaidError,
    ConflictError,
    InvalidFormatError,
    InvalidInputError,
    NoPaymentTypesError,
    NotFoundError,
    StoreFailureError,
)
from .api import dashboard, flats, payment_types, payments

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown events.
    """
    # --- On App Startup ---
    log.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}...")
    create_db_engine_and_session_factory()

    yield # --- Application is now running ---

    # --- On App Shutdown ---
    if not settings.TEST_MODE:
        log.info("Application lifespan shutdown...")
        await dispose_db_engine()
    else:
        log.info("Skipping database engine disposal in TEST_MODE.")


# ---- CREATING THE APP ----
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# --- Add CORS Middleware ---
origins = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:4321",
]
origins.extend(settings.BACKEND_CORS_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],)
# --- End of CORS Middleware ---

# --- Domain error -> HTTP response ---
@app.exception_handler(InvalidFormatError)
async def invalid_format_handler(request: Request, exc: InvalidFormatError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": exc.detail})

@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.detail, "details": exc.errors}
    )

@app.exception_handler(NoPaymentTypesError)
async def no_payment_types_handler(request: Request, exc: NoPaymentTypesError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": exc.detail})

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": exc.detail})

@app.exception_handler(AlreadyPaidError)
async def already_paid_handler(request: Request, exc: AlreadyPaidError):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": exc.detail})

@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"error": exc.detail, "conflicts": jsonable_encoder(exc.conflicts)}
    )

@app.exception_handler(StoreFailureError)
async def store_failure_handler(request: Request, exc: StoreFailureError):
    # The cause was already logged where it was wrapped.
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"}
    )

@app.get("/")
async def health_check():
    return {"status": "ok", "message": f"{settings.APP_NAME} is running"}

app.include_router(dashboard.router)
app.include_router(flats.router)
app.include_router(payment_types.router)
app.include_router(payments.router)
