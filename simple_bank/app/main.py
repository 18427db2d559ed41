import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from sqlalchemy import text

from .api.exceptions import register_exception_handlers
from .api.routes import router as accounts_router, transfer_router
from .core.config import get_settings
from .core.db import init_db
from .core.dependencies import get_transaction_executor
from .services import TransactionExecutor

settings = get_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("app.started", extra={"app_name": settings.app_name})
    yield

app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.include_router(accounts_router)
app.include_router(transfer_router)
register_exception_handlers(app)

@app.get("/health")
def read_health() -> dict[str, str]:
    return {"status": "ok"}

@app.get("/ready")
def read_ready(
    executor: TransactionExecutor = Depends(get_transaction_executor),
) -> dict[str, str]:
    # Surfaces a StorageError (500) when the database cannot be reached.
    executor.run(lambda repository: repository.session.exec(text("SELECT 1")).one())
    return {"status": "ready"}
