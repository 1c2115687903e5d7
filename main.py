from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apis import menu_items, widgets
from helpers.rest import RestError
from settings import API_PREFIX, ENVIRONMENT, logger
from widgets.base import WidgetFactory

app = FastAPI(
    title="CMS REST API",
    version="1.0.0",
    docs_url=f"{API_PREFIX}/docs",
    redoc_url=f"{API_PREFIX}/redoc"
)

# CORS middleware for development
if ENVIRONMENT == "development":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-WP-Total", "X-WP-TotalPages", "Location"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-WP-Total", "X-WP-TotalPages", "Location"],
    )


@app.exception_handler(RestError)
async def rest_error_handler(request: Request, exc: RestError):
    if exc.status >= 500:
        logger.error(f"Request to {request.url.path} failed: {exc.code} {exc.message}")
    return JSONResponse(status_code=exc.status, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    params = {}
    for detail in exc.errors():
        loc = [str(part) for part in detail.get("loc", ()) if part not in ("body", "query", "path")]
        name = loc[0] if loc else "body"
        params.setdefault(name, detail.get("msg", "Invalid value."))
    error = RestError("rest_invalid_param", f"Invalid parameter(s): {', '.join(params)}", 400, {"params": params})
    logger.info(f"Request to {request.url.path} rejected: {error.message}")
    return JSONResponse(status_code=error.status, content=error.to_dict())


# Widget types are registered once; the controller keeps a read-only snapshot
widgets.setup_widgets_controller(WidgetFactory.with_core_widgets().widgets)

app.include_router(menu_items.router, prefix=API_PREFIX)
app.include_router(widgets.router, prefix=API_PREFIX)


@app.get(f"{API_PREFIX}/health")
async def root():
    """API health check."""
    return {"message": "CMS REST API is running"}
