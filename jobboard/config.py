from pydantic_settings import BaseSettings

PLACEHOLDER_SECRET_KEY = "replace-with-a-long-random-secret-key"


class Settings(BaseSettings):
    # Override both in .env / deployment secrets
    database_url: str = "sqlite:///./jobboard.db"
    secret_key: str = PLACEHOLDER_SECRET_KEY
    algorithm: str = "HS256"
    app_env: str = "development"  # development, staging, production

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Signed cookie holding the session (identity token + flash messages).
    # The identity token expires with it.
    session_cookie_name: str = "jobboard_session"
    session_max_age_seconds: int = 14 * 24 * 3600

    # Number of recent listings on the home page
    home_listing_limit: int = 6

    # Requests per client per window; 0 turns a limit off
    rate_limit_window_seconds: int = 60
    rate_limit_auth_per_min: int = 20
    rate_limit_listing_writes_per_min: int = 30

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
