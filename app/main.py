import logging

from fastapi import FastAPI

from app.core.logging_middleware import LoggingMiddleware
from app.routers.scores import router as scores_router

logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Learner Scores")

# Middleware
app.add_middleware(LoggingMiddleware)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(scores_router, tags=["scores"])
