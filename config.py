from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Loan Lifecycle API"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3005

    database_url: str = "sqlite+aiosqlite:///./loan_lifecycle.db"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Ceiling on applications in SUBMITTED or UNDER_REVIEW per customer
    max_active_applications: int = 3

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


def is_sqlite_url(url: str) -> bool:
    return "sqlite" in url.split(":")[0].lower()


settings = Settings()
