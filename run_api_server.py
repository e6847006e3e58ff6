"""
FastAPI Server Startup Script
Run this to start the Invoice Dashboard API server
"""

import uvicorn
from dashboard_server.config import Settings

def main():
    """Start the FastAPI server"""
    settings = Settings.from_env()
    host, port = settings.api_host, settings.api_port

    print(f"🚀 Starting Invoice Dashboard API Server...")
    print(f"📍 Server will run on: http://{host}:{port}")
    print(f"📚 API Documentation: http://{host}:{port}/docs")
    print(f"🔍 Health Check: http://{host}:{port}/api/health")

    uvicorn.run(
        "dashboard_server.main:app",
        host=host,
        port=port,
        reload=True,
        log_level=settings.log_level.lower(),
        access_log=True
    )

if __name__ == "__main__":
    main()
