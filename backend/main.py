# backend/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

from config import Settings, setup_logging
from database import build_engine, build_session_factory, init_db

load_dotenv()

# Routers
from routes.auth import router as auth_router
from routes.users import router as users_router
from routes.restaurants import router as restaurants_router
from routes.menus import router as menus_router, restaurant_menus_router
from routes.reservations import router as reservations_router
from routes.orders import router as orders_router
from routes.logs import router as logs_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(app.state.engine)
    logger.info("Database ready at %s", app.state.engine.url.render_as_string(hide_password=True))
    yield
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around one settings object.

    The engine and session factory derived from ``settings`` live on
    ``app.state`` together with the settings themselves; request
    dependencies read them from there.
    """
    settings = settings or Settings()

    app = FastAPI(title="Restaurant API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)

    origins = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    if settings.FRONTEND_URL:
        origins.append(settings.FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Any fault that escapes a handler becomes a bare 500; details stay in the log
    @app.middleware("http")
    async def server_error_guard(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(status_code=500, content={"message": "Internal server error"})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"message": "Invalid request", "detail": jsonable_encoder(exc.errors())},
        )

    # Router registration
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(restaurants_router)
    app.include_router(restaurant_menus_router)
    app.include_router(menus_router)
    app.include_router(reservations_router)
    app.include_router(orders_router)
    app.include_router(logs_router)

    @app.get("/")
    def read_root():
        return {"message": "Restaurant API is running"}

    return app


settings = Settings()
setup_logging(settings.LOG_LEVEL)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
