# mentorlink/main.py - COMPLETE MAIN FILE
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mentorlink import models  # noqa: F401 - register all tables on Base.metadata
from mentorlink.config import settings
from mentorlink.database import Base, engine
from mentorlink.errors import AppError
from mentorlink.api import auth, connection, notification, search, users

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("mentorlink")

# Create database tables
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(title="MentorLink API", debug=settings.DEBUG)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


# Error handlers
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": "Invalid input", "kind": "InvalidInput"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Server error", "kind": "ServerError"})


# API routers
app.include_router(auth.router, prefix=settings.API_PREFIX)          # /register, /login, /logout
app.include_router(users.router, prefix=settings.API_PREFIX)         # /profile/*
app.include_router(search.router, prefix=settings.API_PREFIX)        # /discover
app.include_router(connection.router, prefix=settings.API_PREFIX)    # /connections/*
app.include_router(notification.router, prefix=settings.API_PREFIX)  # /notifications/*


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "message": "MentorLink API is running",
        "version": "1.0.0",
    }
