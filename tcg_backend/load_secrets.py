import os
import pathlib
from dotenv import load_dotenv

load_dotenv()

default_sqlite_path = pathlib.Path(__file__).parents[1] / "tcg_backend.sqlite3"

port = int(os.getenv("PORT", "3001"))
jwt_secret = os.getenv("JWT_SECRET", "default-secret")
jwt_expires_days = int(os.getenv("JWT_EXPIRES_DAYS", "7"))
database_url = os.getenv("DATABASE_URL", f"sqlite+aiosqlite:///{default_sqlite_path}")
app_env = os.getenv("APP_ENV", "development")
pepper_data = os.getenv("PEPPER_DATA", "")

if __name__ == "__main__":
    print(port, database_url, app_env)
