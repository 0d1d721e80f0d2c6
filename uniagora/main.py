import logging
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from uniagora.config import settings
from uniagora.modules.auth import routes as auth_routes
from uniagora.modules.profiles import routes as profiles_routes
from uniagora.modules.services import routes as services_routes
from uniagora.modules.community import routes as community_routes
from uniagora.modules.conversations import routes as conversations_routes
from uniagora.modules.messages import routes as messages_routes
from uniagora.modules.notifications import routes as notifications_routes
from uniagora.modules.contact import routes as contact_routes
from uniagora.modules.admin import routes as admin_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

# Where a browser is sent when it lacks a session (401) or the right role (403)
AUTH_REDIRECTS = {401: "/login", 403: "/dashboard"}

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(StarletteHTTPException)
async def auth_redirect_exception_handler(request: Request, exc: StarletteHTTPException):
    """Page navigations get redirected on auth failures; API callers keep the JSON error."""
    location = AUTH_REDIRECTS.get(exc.status_code)
    if location and "text/html" in request.headers.get("accept", ""):
        return RedirectResponse(url=location, status_code=303)
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api")
app.include_router(profiles_routes.router, prefix="/api")
app.include_router(services_routes.router, prefix="/api")
app.include_router(community_routes.router, prefix="/api")
app.include_router(conversations_routes.router, prefix="/api")
app.include_router(messages_routes.router, prefix="/api")
app.include_router(notifications_routes.router, prefix="/api")
app.include_router(contact_routes.router, prefix="/api")
app.include_router(admin_routes.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")
    if not settings.get_admin_emails_list():
        logger.warning("ADMIN_EMAILS is empty; only app_metadata admins can open the admin console")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to uniagora", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: extend here with a Supabase round-trip if needed."""
    return {"status": "ready"}
