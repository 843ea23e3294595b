import logging
from datetime import datetime

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import get_settings

# Missing DATABASE_URL / SECRET_KEY stops the process here
settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

from database import SessionLocal, get_db, init_db  # noqa: E402


# ============================================================
# FASTAPI APP
# ============================================================

app = FastAPI(
    title='DripTech API',
    description='Irrigation catalog, quote requests and back-office',
    version='1.0.0'
)


# ============================================================
# CORS CONFIGURATION
# ============================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# ERROR HANDLING
# ============================================================

@app.exception_handler(SQLAlchemyError)
def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ============================================================
# INITIALIZE DATABASE ON STARTUP
# ============================================================

@app.on_event("startup")
def startup():
    from analytics.gamification import initialize_default_achievements
    from users.service import ensure_admin_user

    init_db()

    db = SessionLocal()
    try:
        if settings.admin_email and settings.admin_password:
            if ensure_admin_user(db, settings.admin_email, settings.admin_password):
                logger.info("Bootstrap admin %s created", settings.admin_email)
        initialize_default_achievements(db)
    finally:
        db.close()

    logger.info("DripTech API started")


# ============================================================
# ROUTERS
# ============================================================

from auth.router import router as auth_router  # noqa: E402
from users.router import router as users_router  # noqa: E402
from products.router import router as products_router, admin_router as admin_products_router  # noqa: E402
from quotes.router import public_router as quotes_public_router, router as quotes_router  # noqa: E402
from projects.router import router as projects_router, admin_router as admin_projects_router  # noqa: E402
from blog.router import router as blog_router, admin_router as admin_blog_router  # noqa: E402
from contacts.router import router as contacts_router, admin_router as admin_contacts_router  # noqa: E402
from team.router import router as team_router, admin_router as admin_team_router  # noqa: E402
from success_stories.router import (  # noqa: E402
    router as stories_router,
    admin_router as admin_stories_router,
)
from analytics.router import router as tracking_router, admin_router as admin_analytics_router  # noqa: E402

# Public site
app.include_router(auth_router)
app.include_router(products_router)
app.include_router(quotes_public_router)
app.include_router(projects_router)
app.include_router(blog_router)
app.include_router(contacts_router)
app.include_router(team_router)
app.include_router(stories_router)
app.include_router(tracking_router)

# Back-office
app.include_router(users_router)
app.include_router(admin_products_router)
app.include_router(quotes_router)
app.include_router(admin_projects_router)
app.include_router(admin_blog_router)
app.include_router(admin_contacts_router)
app.include_router(admin_team_router)
app.include_router(admin_stories_router)
app.include_router(admin_analytics_router)


# ============================================================
# ROOT & HEALTH ENDPOINTS
# ============================================================

@app.get("/")
def read_root():
    return {
        "message": "DripTech API is running!",
        "version": "1.0.0",
    }


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check failed")
        raise HTTPException(status_code=503, detail="Database unavailable")

    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "database": db.get_bind().url.get_backend_name(),
    }
