from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from journey.core.config import settings
from journey.core.database import engine
from journey.core.errors import JourneyError
from journey.core.init_db import init_db
from journey.core.logger import logger
from journey.dependencies.notifications import get_dispatcher
from journey.routes import api_router

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.PROJECT_DESCRIPTION,
    openapi_url="/openapi.json"
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.CORS_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(JourneyError)
async def journey_error_handler(request: Request, exc: JourneyError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        message = "Invalid JSON: " + "; ".join(str(err.get("msg")) for err in errors)
    else:
        details = []
        for err in errors:
            field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
            details.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
        message = "invalid input: " + "; ".join(details)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


# Include all API routes
app.include_router(api_router)

@app.get("/")
async def root():
    return {"message": "Welcome to Journey API"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

@app.on_event("startup")
async def startup_event():
    if settings.AUTO_CREATE_TABLES:
        await init_db()

@app.on_event("shutdown")
async def shutdown_event():
    dispatcher = get_dispatcher()
    if dispatcher.pending:
        logger.info(f"Waiting for {dispatcher.pending} pending email sends")
    await dispatcher.drain()
    await engine.dispose()
