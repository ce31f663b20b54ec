import os
import pathlib

from dotenv import load_dotenv
from sqlalchemy.engine import make_url

load_dotenv()

user = os.getenv("DB_USER")
password = os.getenv("DB_PASSWORD")
host = os.getenv("DB_HOST")
port = os.getenv("DB_PORT", "5432")
db_name = os.getenv("DB_NAME")

sqlite_path = pathlib.Path(__file__).parents[1] / "company_manager.sqlite3"

database_url = os.getenv("DATABASE_URL")
if database_url is None:
    if host:
        database_url = f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{db_name}"
    else:
        database_url = f"sqlite+aiosqlite:///{sqlite_path}"

rng_seed = int(os.environ["RNG_SEED"]) if os.getenv("RNG_SEED") else None
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
lock_cleanup_hours = float(os.getenv("LOCK_CLEANUP_HOURS", "1"))

server_host = os.getenv("SERVER_HOST", "0.0.0.0")
server_port = int(os.getenv("SERVER_PORT", "8080"))


def masked_database_url() -> str:
    return make_url(database_url).render_as_string(hide_password=True)


if __name__ == "__main__":
    print(masked_database_url(), rng_seed, log_level, lock_cleanup_hours, server_host, server_port)
