import os
from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

class Settings:
    DEBUG = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    DEFAULT_USERNAME = os.getenv("DEFAULT_USERNAME", "default")
    DEFAULT_PASSWORD = os.getenv("DEFAULT_PASSWORD", "password")
    DEFAULT_PORTFOLIO_NAME = os.getenv("DEFAULT_PORTFOLIO_NAME", "My Portfolio")

    try:
        MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", str(10 * 1024 * 1024)))
    except (TypeError, ValueError):
        MAX_UPLOAD_SIZE = 10 * 1024 * 1024

settings = Settings()
