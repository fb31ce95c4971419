import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware

from tenant_api.config import settings
from tenant_api.core.exceptions import TenantApiException
from tenant_api.core.logging_config import configure_logging
from tenant_api.core.middleware import AuthMiddleware
from tenant_api.core.responses import error_response
from tenant_api.routes import (
    auth_routes,
    dashboard_routes,
    file_routes,
    lease_routes,
    maintenance_routes,
    payment_routes,
    property_routes,
    stripe_routes,
    tenant_routes,
    user_admin_routes,
)

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,  # Disable in production
    redoc_url="/redoc" if settings.DEBUG else None,
)

# Middleware added last runs first: CORS wraps auth so 401s carry CORS headers
app.add_middleware(AuthMiddleware)

cors_origins = settings.cors_origins_list
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# Exception handlers
@app.exception_handler(TenantApiException)
async def tenant_api_exception_handler(request: Request, exc: TenantApiException):
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return error_response(exc.status_code, str(exc), exc.error_code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred.", "SERVER_ERROR"
    )


# Health check endpoints
@app.get("/health")
@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "version": settings.APP_VERSION}


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "Documentation disabled in production",
    }


# Include routers
app.include_router(auth_routes.router, prefix="/api/auth", tags=["Auth"])
app.include_router(user_admin_routes.router, prefix="/api/admin/users", tags=["Users"])
app.include_router(tenant_routes.router, prefix="/api/tenants", tags=["Tenants"])
app.include_router(maintenance_routes.router, prefix="/api/maintenance", tags=["Maintenance"])
app.include_router(file_routes.router, prefix="/api/files", tags=["Files"])
app.include_router(property_routes.router, prefix="/api/admin/properties", tags=["Properties"])
app.include_router(payment_routes.admin_router, prefix="/api/admin/payments", tags=["Payments"])
app.include_router(payment_routes.router, prefix="/api/payments", tags=["Payments"])
app.include_router(lease_routes.admin_router, prefix="/api/admin/leases", tags=["Leases"])
app.include_router(lease_routes.router, prefix="/api/leases", tags=["Leases"])
app.include_router(dashboard_routes.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(stripe_routes.router, prefix="/api/stripe", tags=["Stripe"])
