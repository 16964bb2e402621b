import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from shiftclock.core.config import ServerConfig # Import ServerConfig
from shiftclock.core.database import init_database # Import database functions
from shiftclock.api.endpoints import general, entries, payroll, rates # Import all endpoint routers
from shiftclock.services.rate_service import load_pay_rates

# Configure logging
log_level = getattr(logging, ServerConfig.LOG_LEVEL.upper())
logging.basicConfig(level=log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup logic
    logger.info("=" * 60)
    logger.info(f"{ServerConfig.APP_NAME.upper()}")
    logger.info(f"Version: {ServerConfig.APP_VERSION}")
    logger.info("=" * 60)

    init_database()

    rates = load_pay_rates()
    logger.info(f"Base rate: {rates.base_hourly_rate:.2f}/h")
    logger.info(
        f"Overtime after {rates.daily_overtime_threshold_hours}h/day or "
        f"{rates.weekly_overtime_threshold_hours}h/week, penalty after "
        f"{rates.daily_penalty_ot_threshold_hours}h/day or {rates.weekly_penalty_ot_threshold_hours}h/week"
    )
    logger.info(f"Night differential: {rates.night_diff_start_time}-{rates.night_diff_end_time}")
    logger.info(f"Database: {ServerConfig.DATABASE_PATH}")
    logger.info("=" * 60)

    yield  # Server is running

    logger.info(f"Shutting down {ServerConfig.APP_NAME}...")


app = FastAPI(
    title=ServerConfig.APP_NAME,
    version=ServerConfig.APP_VERSION,
    description=ServerConfig.APP_DESCRIPTION,
    lifespan=lifespan,
    docs_url="/docs" if ServerConfig.ENABLE_API_DOCS else None,
    redoc_url="/redoc" if ServerConfig.ENABLE_API_DOCS else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ServerConfig.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(general.router, tags=["General"])
app.include_router(entries.router, tags=["Entries"])
app.include_router(payroll.router, tags=["Payroll"])
app.include_router(rates.router, tags=["Pay Rates"])
