import logging
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from .config import Settings, configure_logging
from .database import DatabaseClient, DatabaseError
from .dependencies import get_db
from .models import ErrorResponse
from .navigation import Redirect
from .routers.invoices import router as invoices_router
from .routers.auth import router as auth_router
from datetime import date

configure_logging(Settings.from_env().log_level)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Invoice Dashboard API",
    description="Form handlers for creating, editing and deleting dashboard invoices",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(invoices_router)

app.include_router(auth_router)

@app.get("/")
async def root():
    """Health check endpoint"""
    return {"message": "Invoice Dashboard API is running", "status": "healthy"}

@app.get("/api/health")
async def health_check(db: DatabaseClient = Depends(get_db)):
    """Detailed health check with database connectivity"""
    try:
        total_invoices = db.count_invoices()
    except DatabaseError as e:
        raise HTTPException(
            status_code=503,
            detail=f"Service unavailable: {str(e)}"
        )
    return {
        "status": "healthy",
        "database": "connected",
        "total_invoices": total_invoices,
        "timestamp": date.today().isoformat()
    }

# Redirects raised by form handlers
@app.exception_handler(Redirect)
async def redirect_handler(request, exc):
    return RedirectResponse(exc.url, status_code=exc.status_code)

# Error handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            success=False,
            error=exc.detail,
            details=f"Status Code: {exc.status_code}"
        ).model_dump()
    )

@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            success=False,
            error="Internal server error",
            details=str(exc)
        ).model_dump()
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "dashboard_server.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
