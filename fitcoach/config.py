import os
import json
from sqlalchemy.engine import URL
from dotenv import load_dotenv

load_dotenv()

JWT_SECRET = os.getenv("FITCOACH_JWT_SECRET", "CHANGE_ME_DEV_ONLY")
JWT_ALGORITHM = os.getenv("FITCOACH_JWT_ALGORITHM", "HS256")
JWT_EXPIRE_SEC = int(os.getenv("FITCOACH_JWT_EXPIRE_SEC", "3600"))

PORT = int(os.getenv("FITCOACH_PORT", "3000"))
LOG_LEVEL = os.getenv("FITCOACH_LOG_LEVEL", "INFO")


def database_url() -> str | URL:
    """
    Resolve where the store lives:
    - FITCOACH_DATABASE_URL wins when set
    - otherwise MySQL from the FITCOACH_DB_* parts if a host is given
    - otherwise a local sqlite file
    """
    explicit = os.getenv("FITCOACH_DATABASE_URL")
    if explicit:
        return explicit

    host = os.getenv("FITCOACH_DB_HOST")
    if host:
        return URL.create(
            "mysql+pymysql",
            username=os.getenv("FITCOACH_DB_USER"),
            password=os.getenv("FITCOACH_DB_PASSWORD"),
            host=host,
            port=int(os.getenv("FITCOACH_DB_PORT", "3306")),
            database=os.getenv("FITCOACH_DB_NAME"),
        )
    return "sqlite:///fitcoach.db"


def parse_origins(env_value: str | None) -> list[str]:
    """
    Parse comma-separated origins from env; fallback to ["*"] if unset/blank.
    """
    if not env_value:
        return ["*"]
    # support JSON-style list or comma-separated list
    v = env_value.strip()
    if v.startswith("[") and v.endswith("]"):
        try:
            parsed = json.loads(v)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list) and all(isinstance(x, str) for x in parsed):
            return parsed
    return [o.strip() for o in v.split(",") if o.strip()]
