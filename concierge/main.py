import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from concierge.core.config import settings
from concierge.core.database import SessionLocal
from concierge.core.errors import setup_exception_handlers
from concierge.api.routes.sites import router as sites_router
from concierge.api.routes.spaces import router as spaces_router, space_types_router
from concierge.api.routes.residents import router as residents_router
from concierge.api.routes.leases import router as leases_router
from concierge.api.routes.funders import router as funders_router
from concierge.api.routes.service_requests import router as service_requests_router
from concierge.api.routes.orders import service_orders_router, work_orders_router
from concierge.api.routes.audit_logs import router as audit_logs_router
from concierge.api.routes.reports import router as reports_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# 1) Create the app FIRST
app = FastAPI(title="Concierge API")

# 2) Add CORS Middleware BEFORE routes
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# 3) Include routers AFTER app is created
app.include_router(sites_router)
app.include_router(space_types_router)
app.include_router(spaces_router)
app.include_router(residents_router)
app.include_router(leases_router)
app.include_router(funders_router)
app.include_router(service_requests_router)
app.include_router(service_orders_router)
app.include_router(work_orders_router)
app.include_router(audit_logs_router)
app.include_router(reports_router)


# 4) Health check endpoints
@app.get("/health")
def health():
    return {"ok": True, "service": "concierge"}


@app.get("/db-health")
def db_health():
    db = SessionLocal()
    try:
        db.execute(text("select 1"))
        return {"ok": True, "db": "connected"}
    finally:
        db.close()
