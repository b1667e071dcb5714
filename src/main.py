from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.config import settings
from src.logging_setup import setup_logging
from src.estimator import router as estimator_router

setup_logging(
    level=settings.LOG_LEVEL,
    json_output=settings.LOG_JSON,
    environment=settings.ENVIRONMENT
)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Train ticket price estimation API",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],  # Frontend dev servers
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(
    estimator_router,
    prefix=f"{settings.API_V1_STR}/estimates",
    tags=["Ticket Estimation"]
)

@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Train Ticket Estimator API",
        "version": "1.0.0",
        "docs": "/docs"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
