from apscheduler.schedulers.asyncio import AsyncIOScheduler
import logging
import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager

from company_manager.db import create_tables
from company_manager.load_secrets import lock_cleanup_hours, log_level, server_host, server_port
from company_manager.routers import contracts, employees, game
from company_manager.services.game_db import game_service

scheduler = AsyncIOScheduler()
logging.basicConfig(level=log_level)


@asynccontextmanager
async def lifespan(app):
    """Create the tables and start the housekeeping jobs.
    This function is called to start the server.
    """
    await create_tables()

    # Locks of sessions nobody is playing are dropped
    scheduler.add_job(
        game_service.locks.cleanup_idle,
        "interval",
        hours=lock_cleanup_hours,
    )
    scheduler.start()
    try:
        yield
    finally:
        scheduler.shutdown()
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan)
app.include_router(game.game_router)
app.include_router(employees.employee_router)
app.include_router(contracts.contract_router)


def run():
    """Serve the app with uvicorn"""
    uvicorn.run(app, host=server_host, port=server_port)


if __name__ == "__main__":
    run()
