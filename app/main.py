# app/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.dependencies import get_mongo_client, cleanup_resources
from app.core.exceptions import SafeGuardException
from app.core.logging import get_logger

logger = get_logger(__name__)

# ===================
# Lifespan Management
# ===================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"IPFS provider: {settings.IPFS_PROVIDER}, chain id: {settings.CHAIN_ID}")
    if settings.MONGODB_CREATE_INDEXES:
        try:
            get_mongo_client().ensure_indexes()
        except SafeGuardException as e:
            logger.error(f"Index creation skipped: {e.message}")
    yield
    logger.info("Shutting down...")
    cleanup_resources()

# ===================
# Application Setup
# ===================

app = FastAPI(
    title=settings.APP_NAME,
    description="Insurance for tokenized real-world assets: policies, claims, IPFS documents and contracts",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# ===================
# CORS Middleware
# ===================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===================
# Exception Handlers
# ===================

@app.exception_handler(SafeGuardException)
async def safeguard_exception_handler(request: Request, exc: SafeGuardException):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error_code} {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = str(first.get("loc", ["", "request"])[-1])
    if first.get("type") == "missing":
        message = f"Missing required field: {field}"
    else:
        message = f"Invalid value for field: {field}"
    return JSONResponse(
        status_code=400,
        content={
            "error": message,
            "error_code": "VALIDATION_ERROR",
            "details": {"field": field, "reason": first.get("msg", "")}
        }
    )

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

# ===================
# Include Routers
# ===================

from app.api.v1.policies import router as policies_router
from app.api.v1.claims import router as claims_router
from app.api.v1.insurance_options import router as insurance_options_router
from app.api.v1.tokens import router as tokens_router
from app.api.v1.users import router as users_router
from app.api.v1.contracts import router as contracts_router
from app.api.v1.chain import router as chain_router
from app.api.v1.dashboard import router as dashboard_router
from app.api.v1.admin import router as admin_router

prefix = settings.API_PREFIX
app.include_router(policies_router, prefix=f"{prefix}/policies", tags=["policies"])
app.include_router(claims_router, prefix=f"{prefix}/claims", tags=["claims"])
app.include_router(insurance_options_router, prefix=f"{prefix}/insurance-options", tags=["insurance-options"])
app.include_router(tokens_router, prefix=f"{prefix}/tokens", tags=["tokens"])
app.include_router(users_router, prefix=f"{prefix}/users", tags=["users"])
app.include_router(contracts_router, prefix=f"{prefix}/contracts", tags=["contracts"])
app.include_router(chain_router, prefix=f"{prefix}/chain", tags=["chain"])
app.include_router(dashboard_router, prefix=f"{prefix}/dashboard", tags=["dashboard"])
app.include_router(admin_router, prefix=f"{prefix}/admin", tags=["admin"])

# ===================
# Root Endpoints
# ===================

@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "endpoints": {
            "policies": f"{prefix}/policies",
            "claims": f"{prefix}/claims",
            "insurance_options": f"{prefix}/insurance-options",
            "tokens": f"{prefix}/tokens",
            "users": f"{prefix}/users",
            "contracts": f"{prefix}/contracts",
            "chain": f"{prefix}/chain",
            "dashboard": f"{prefix}/dashboard",
            "admin": f"{prefix}/admin"
        }
    }

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": settings.APP_VERSION}
