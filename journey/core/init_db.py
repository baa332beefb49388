from journey.core.database import engine, Base
from journey.core.logger import logger
import journey.models  # noqa: F401  registers every table on Base.metadata

async def init_db(bind=engine):
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")
