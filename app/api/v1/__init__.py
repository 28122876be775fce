# app/api/v1/__init__.py
"""
API v1 package.

The router composition lives in `app.api.v1.router`; include it into the
FastAPI app with:

    from app.api.v1.router import router as api_v1_router
    app.include_router(api_v1_router, prefix="/api/v1")
"""
