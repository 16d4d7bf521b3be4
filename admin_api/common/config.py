import os


class Config():
    #Basic app settings
    APP_NAME = 'admin_api' #Is gonna match the app root
    UVICORN_PORT = 8000
    UVICORN_HOST = '0.0.0.0'
    GIT_COMMIT = os.getenv("GIT_COMMIT", "[commit hash unknown]")
    MODE = os.getenv("MODE", "Local build")
    JSON_LOGS = int(os.getenv("JSON_LOGS", "0"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

    #Security settings
    JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
    ALGORITHM = "HS256"

    #Passwords
    INVALID_PASSWORDS_FILE = os.getenv("INVALID_PASSWORDS_FILE", "/etc/admin_api/invalid_passwords.txt")
    INVALID_PASSWORDS_RELOAD = os.getenv("INVALID_PASSWORDS_RELOAD", "0") == "1" #1 -> re-read file on every validation
    PASSWORD_MIN_LENGTH = 8
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

    #Listing
    DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "1000"))
    MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "10000"))

    #PostgreSQL Template. RETURNING is required, so MySQL is not an option here.
    DB_USER = os.getenv("POSTGRES_USER")
    DB_PASS = os.getenv("POSTGRES_PASSWORD")
    DB_NAME = os.getenv("POSTGRES_DB")
    DB_HOST = os.getenv("POSTGRES_HOST", "db")
    DB_PORT = 5432
    DB_URL = os.getenv("DB_URL", f"postgresql+asyncpg://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}")

    #DB Common
    DB_WAIT_INTERVAL_SECONDS = 10  #seconds
    DB_WAIT_MAX_RETRIES = 10
    DB_CREATE_SCHEMA = os.getenv("DB_CREATE_SCHEMA", "0") == "1" #migrations are handled elsewhere in prod
    DB_KWARGS = {
        'echo': False,
    }

    #Telemetry
    OTEL_ENABLED = os.getenv("OTEL_ENABLED", "0") == "1"
    OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", APP_NAME)
    OTEL_GRPC_ENDPOINT = os.getenv("OTEL_GRPC_ENDPOINT", "http://otel-collector:4317")
