# config.py
import os


class Config:
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "mysql+pymysql://root:@localhost/taskflow"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Calendar zone used for "today" / "yesterday" in streak bookkeeping
    STATS_TIMEZONE = os.environ.get("STATS_TIMEZONE", "UTC")

    # Gamification
    HABIT_COMPLETION_POINTS = int(os.environ.get("HABIT_COMPLETION_POINTS", 5))
    TASK_COMPLETION_POINTS = int(os.environ.get("TASK_COMPLETION_POINTS", 10))

    # Quote of the day proxy
    QUOTE_API_URL = os.environ.get("QUOTE_API_URL", "https://zenquotes.io/api/random")
    QUOTE_TIMEOUT_SECONDS = float(os.environ.get("QUOTE_TIMEOUT_SECONDS", 5))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    STATS_TIMEZONE = "UTC"
    QUOTE_API_URL = "http://quotes.invalid/api/random"
    QUOTE_TIMEOUT_SECONDS = 1
