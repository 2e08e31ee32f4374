# storefront/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from storefront.api import include_routers
from storefront.data.database import Base, engine
from storefront.domain.errors import StorefrontError
from storefront.utils.logging import get_logger

# every model must be imported before create_all
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorefrontError)
    async def storefront_error(request: Request, exc: StorefrontError):
        return _message(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if not errors:
            return _message(400, "Invalid request")
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        return _message(400, f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request"))

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return _message(exc.status_code, str(exc.detail))

    @app.exception_handler(IntegrityError)
    async def integrity_error(request: Request, exc: IntegrityError):
        logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
        return _message(409, "Conflicting update, please retry")

    @app.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _message(500, "Internal server error")


def create_app() -> FastAPI:
    init_db()

    app = FastAPI(
        title="Storefront",
        version="1.0.0",
    )
    register_error_handlers(app)
    include_routers(app)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
