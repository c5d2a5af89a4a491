# backend/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from database import SessionLocal, init_db
from populate_db import seed_demo_users
from utils.errors import register_error_handlers
from utils.logging_config import setup_logging

from routes.admin import router as admin_router
from routes.auth import router as auth_router
from routes.logs import router as logs_router
from routes.products import router as products_router
from routes.purchases import router as purchases_router
from routes.reference import router as reference_router
from routes.sales import router as sales_router
from routes.stock import router as stock_router

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if settings.SEED_DEMO_USERS:
        db = SessionLocal()
        try:
            seed_demo_users(db)
        finally:
            db.close()
    logger.info("Minimarket API started")
    yield


app = FastAPI(title="Minimarket Back-Office API", version="1.0.0", lifespan=lifespan)

# CORS: local Vite dev server plus the configured frontend
origins = ["http://localhost:5173", "http://127.0.0.1:5173"]
if settings.FRONTEND_URL and settings.FRONTEND_URL not in origins:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(reference_router)
app.include_router(products_router)
app.include_router(stock_router)
app.include_router(purchases_router)
app.include_router(sales_router)
app.include_router(logs_router)


@app.get("/healthcheck")
def healthcheck():
    return {"status": "ok"}
