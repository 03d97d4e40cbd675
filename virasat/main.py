import logging
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from typing import Dict, Optional

from virasat.config.settings import settings
from virasat.core.dependencies import get_optional_user
from virasat.core.errors import AuthRequired
from virasat.core.rate_limit import limiter
from virasat.modules.auth import routes as auth_routes
from virasat.modules.users import routes as users_routes
from virasat.modules.records import routes as records_routes
from virasat.modules.documents import routes as documents_routes
from virasat.modules.nominees import routes as nominees_routes
from virasat.modules.dashboard import routes as dashboard_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(AuthRequired)
async def auth_required_handler(request: Request, exc: AuthRequired):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "redirect": exc.redirect_to},
        headers=exc.headers,
    )


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
                    (b"Referrer-Policy", b"no-referrer"),
                    (b"Cache-Control", b"no-store"),
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
    expose_headers=["X-Redirect-To", "Content-Disposition"],
)

# Include module routes
app.include_router(auth_routes.router, prefix=API_PREFIX)
app.include_router(users_routes.router, prefix=API_PREFIX)
app.include_router(records_routes.router, prefix=API_PREFIX)
app.include_router(documents_routes.router, prefix=API_PREFIX)
app.include_router(nominees_routes.router, prefix=API_PREFIX)
app.include_router(dashboard_routes.router, prefix=API_PREFIX)


@app.on_event("startup")
async def startup_event():
    logger.info(f"Application startup (storage backend: {settings.storage_backend})")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root(user_data: Optional[Dict] = Depends(get_optional_user)):
    """Signed-in callers go to the dashboard; everyone else gets the landing payload"""
    if user_data:
        return RedirectResponse(url=f"{API_PREFIX}/dashboard", status_code=307)
    return {
        "message": "Welcome to Virasat",
        "tagline": "Your digital legacy guardian",
        "login": settings.login_path,
        "signup": "/signup",
    }


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: extend here with Supabase checks if needed."""
    return {"status": "ready"}
