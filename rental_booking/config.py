"""Application configuration, read from the environment."""
import os


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    # Pickle file backing the Store; None means <project root>/data.pkl
    DATA_PATH = os.getenv("DATA_PATH")
    # Zone used to decide "today" for the cancellation window
    TIMEZONE = os.getenv("TIMEZONE", "UTC")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    APP_ENV = os.getenv("APP_ENV", "development")
    JSON_SORT_KEYS = False
