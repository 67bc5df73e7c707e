"""
CropYield - Crop Yield Prediction and Farming Advisory
FastAPI Backend Main Application
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from crop import router as crop_router
from errors import InvalidInput

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Yield prediction and farming advisory for Indian field crops",
    version=settings.APP_VERSION,
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    logger.warning("Invalid input on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=422, content={"detail": exc.message, "errors": exc.errors})


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": settings.APP_NAME, "version": settings.APP_VERSION}


# Include API routes
app.include_router(crop_router, prefix="/api", tags=["Crop Yield"])

if __name__ == "__main__":
    import uvicorn
    # Run the application using uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
