from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exception_handlers import http_exception_handler
from sqlalchemy.exc import SQLAlchemyError

from smartclinic.core.config import settings
from smartclinic.core.exceptions import InternalError
from smartclinic.core.logger import logger
from smartclinic.core.redis import redis_client
from smartclinic.middleware.log_middleware import LogMiddleware

@asynccontextmanager
async def lifespan(app: FastAPI):
    from smartclinic.db.session import init_db
    await init_db()
    yield
    await redis_client.close()

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(LogMiddleware)

@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Storage failure on {request.method} {request.url.path}", exc_info=exc)
    return await http_exception_handler(request, InternalError())

@app.get("/")
async def root():
    return {"message": "Welcome to SmartClinic API"}

from smartclinic.api.api import api_router
app.include_router(api_router, prefix=settings.API_V1_STR)
