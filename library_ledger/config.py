import os


def sqlalchemy_engine_options(uri: str, timeout: float) -> dict:
    """
    Engine options bounding how long a persistence call may wait. SQLite
    gets a busy timeout, PostgreSQL a statement and lock timeout; other
    backends only get the pool checkout timeout.
    """
    options = {"pool_pre_ping": True}
    if uri.startswith("sqlite"):
        # sqlite3 busy timeout: how long a writer waits on a locked database
        options["connect_args"] = {"timeout": timeout, "check_same_thread": False}
        return options

    options["pool_timeout"] = timeout
    if uri.startswith("postgresql"):
        ms = int(timeout * 1000)
        # row-lock waits and long statements are cancelled server-side
        options["connect_args"] = {"options": f"-c statement_timeout={ms} -c lock_timeout={ms}"}
    return options


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "library-ledger-dev-key")

    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///library.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    DB_TIMEOUT_SECONDS = float(os.getenv("DB_TIMEOUT_SECONDS", "10"))
    SQLALCHEMY_ENGINE_OPTIONS = sqlalchemy_engine_options(SQLALCHEMY_DATABASE_URI, DB_TIMEOUT_SECONDS)

    BOOK_LIST_DEFAULT_LIMIT = int(os.getenv("BOOK_LIST_DEFAULT_LIMIT", "10"))
    BOOK_LIST_MAX_LIMIT = int(os.getenv("BOOK_LIST_MAX_LIMIT", "100"))

    AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "1") == "1"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
