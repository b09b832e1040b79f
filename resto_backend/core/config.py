# resto_backend/core/config.py
# type: ignore

import os
from dotenv import load_dotenv

# ***************************************************************
# 1. Load the .env file (one level above the package)
# ***************************************************************
load_dotenv(dotenv_path=os.getenv("ENV_FILE", "../.env"))


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# ***************************************************************
# 2. Database
# ***************************************************************
DATABASE_URL = os.getenv("DATABASE_URL")
SQL_ECHO = _get_bool("SQL_ECHO")

# ***************************************************************
# 3. JWT
# ***************************************************************
# Override SECRET_KEY in every deployed environment.
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-in-production")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# ***************************************************************
# 4. Logging
# ***************************************************************
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ***************************************************************
# 5. HTTP server and CORS
# ***************************************************************
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
# Comma-separated list; "*" allows any origin
CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]
