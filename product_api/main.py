# product_api/main.py
import time
from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import settings
from .core import ProductIn, PRODUCT_INVALID_MSG
from .database import ProductStore
from .errors import ErrorKind, ServiceError, error_name_for_status, invalid
from .log import configure_logging, get_logger
from .service import (
    authenticate, parse_product,
    list_products_logic, get_product_logic, search_product_logic, stats_logic,
    create_product_logic, update_product_logic, delete_product_logic,
)

logger = get_logger(__name__)

WELCOME_TEXT = "Welcome to the Product API! Go to /api/products to see all products."


# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def require_api_key(request: Request, x_api_key: Optional[str] = Header(None)) -> None:
    authenticate(x_api_key, request.app.state.api_key)


async def product_payload(request: Request, _auth: None = Depends(require_api_key)) -> ProductIn:
    # body is read only after the key check has passed
    try:
        data = await request.json()
    except ValueError:
        raise invalid(PRODUCT_INVALID_MSG)
    return parse_product(data)


# ---------------------------
# Product endpoints
# ---------------------------
router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("")
async def list_products(
    category: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
    store: ProductStore = Depends(get_store),
):
    return list_products_logic(store, category=category, page=page, limit=limit)


# search and stats must be registered before /{product_id}
@router.get("/search/{name}")
async def search_products(name: str, store: ProductStore = Depends(get_store)):
    return search_product_logic(store, name)


@router.get("/stats")
async def product_stats(store: ProductStore = Depends(get_store)):
    return stats_logic(store)


@router.get("/{product_id}")
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return get_product_logic(store, product_id)


@router.post("", status_code=201)
async def create_product(
    payload: ProductIn = Depends(product_payload),
    store: ProductStore = Depends(get_store),
):
    return await create_product_logic(store, payload)


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    payload: ProductIn = Depends(product_payload),
    store: ProductStore = Depends(get_store),
):
    return await update_product_logic(store, product_id, payload)


@router.delete("/{product_id}", dependencies=[Depends(require_api_key)])
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    return await delete_product_logic(store, product_id)


# ---------------------------
# Error boundary
# ---------------------------
async def _service_error_handler(request: Request, exc: ServiceError):
    logger.info("%s %s -> %d %s: %s", request.method, request.url.path,
                exc.status_code, exc.kind.value, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        loc = err.get("loc") or ("request",)
        problems.append(f"{loc[-1]}: {err.get('msg')}")
    err = ServiceError(ErrorKind.VALIDATION, "Invalid request parameters. " + "; ".join(problems))
    return await _service_error_handler(request, err)


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    # routing errors: unknown path (404), unsupported method (405)
    logger.info("%s %s -> %d", request.method, request.url.path, exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error_name_for_status(exc.status_code), "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_error_handler(request: Request, exc: Exception):
    logger.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=ErrorKind.INTERNAL.status_code,
        content={"error": ErrorKind.INTERNAL.value, "message": "Something went wrong"},
    )


# ---------------------------
# App factory
# ---------------------------
def create_app(api_key: Optional[str] = None, store: Optional[ProductStore] = None) -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Product API (in-memory)", version="1.0.0")
    app.state.store = store if store is not None else ProductStore()
    app.state.api_key = api_key if api_key is not None else settings.API_KEY

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _log_requests(request: Request, call_next):
        target = request.url.path
        if request.url.query:
            target += "?" + request.url.query
        logger.info("%s %s", request.method, target)
        started = time.perf_counter()
        response = await call_next(request)
        logger.debug("%s %s -> %d in %.1fms", request.method, target,
                     response.status_code, (time.perf_counter() - started) * 1000)
        return response

    app.add_exception_handler(ServiceError, _service_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return WELCOME_TEXT

    app.include_router(router)
    return app


app = create_app()

if __name__ == "__main__":
    logger.info("Server is running on http://localhost:%d", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
