from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from app.config import get_settings
from app.database import init_db
from app.errors import setup_error_handlers
from app.middleware.correlation import CorrelationMiddleware, CorrelationIdFilter
from app.middleware.rate_limit import limiter
from app.routes import applications, auth, jobs, stats
from app.utils.logger import logger

settings = get_settings()

logger.addFilter(CorrelationIdFilter())

app = FastAPI(title=settings.app_name, version=settings.app_version)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
setup_error_handlers(app)

allowed_origins = [origin.strip() for origin in settings.allowed_origins.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["Content-Type", "user-id", "X-Correlation-ID"],
)
app.add_middleware(CorrelationMiddleware)

# Startup: Initialize database
@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {settings.app_name} API...")
    await init_db()
    logger.info(f"Backend ready at http://{settings.backend_host}:{settings.backend_port}")

@app.get("/api/health")
async def health_check():
    return {
        "status": "online",
        "message": f"{settings.app_name} API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

# Register routes
app.include_router(auth.router, prefix="/api", tags=["Accounts"])
app.include_router(jobs.router, prefix="/api", tags=["Jobs"])
app.include_router(applications.router, prefix="/api", tags=["Applications"])
app.include_router(stats.router, prefix="/api", tags=["Stats"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.debug
    )
