import logging

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler, request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from jobboard.config import PLACEHOLDER_SECRET_KEY, settings
from jobboard.core.flash import set_flash
from jobboard.core.rate_limiter import rate_limiter, rule_for
from jobboard.database import init_db, engine
from jobboard.dependencies import NotAuthenticated
from jobboard.logging_config import setup_logging
from jobboard.routers import auth, home, listings
from jobboard.routers.listings import NOT_FOUND_MESSAGE
from jobboard.views import render_error, render_not_found

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="JobBoard",
    description="Job listings with search, accounts and owner-only editing.",
    version="1.0.0",
)

app.include_router(home.router)
app.include_router(listings.router)
app.include_router(auth.router)


@app.exception_handler(NotAuthenticated)
async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
    set_flash(request, "error", "Please log in to continue")
    return RedirectResponse("/auth/login", status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(StarletteHTTPException)
async def html_http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = exc.detail if exc.detail and exc.detail != "Not Found" else "Resource not found"
        return render_not_found(request, message)
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # A malformed id can't name any record
    if any(err.get("loc") and err["loc"][0] == "path" for err in exc.errors()):
        message = NOT_FOUND_MESSAGE if request.url.path.startswith("/listings") else "Resource not found"
        return render_not_found(request, message)
    return await request_validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return render_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


@app.middleware("http")
async def apply_rate_limits(request: Request, call_next):
    rule = rule_for(request.method, request.url.path)
    if rule is None:
        return await call_next(request)

    client_ip = request.client.host if request.client else "unknown"
    retry_after = rate_limiter.hit(rule, client_ip)
    if retry_after:
        logger.warning("Rate limit hit: scope=%s ip=%s path=%s", rule.scope, client_ip, request.url.path)
        return render_error(
            request,
            status.HTTP_429_TOO_MANY_REQUESTS,
            "Too many requests. Please retry shortly.",
            headers={"Retry-After": str(retry_after)},
        )
    return await call_next(request)


# Added last so it wraps the rate limiter and every route
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie=settings.session_cookie_name,
    max_age=settings.session_max_age_seconds,
    same_site="lax",
    https_only=settings.app_env.lower() in {"production", "prod"},
)


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


@app.on_event("startup")
def on_startup():
    logger.info("Starting JobBoard")
    env = (settings.app_env or "development").lower()
    if env in {"production", "prod"}:
        if settings.secret_key == PLACEHOLDER_SECRET_KEY:
            raise RuntimeError("SECRET_KEY placeholder is not allowed in production")
    elif settings.secret_key == PLACEHOLDER_SECRET_KEY:
        logger.warning("SECRET_KEY is using placeholder default. Set SECRET_KEY in .env for secure deployments.")
    init_db()
