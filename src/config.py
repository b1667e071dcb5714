from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Price source
    PRICE_API_URL: str = "https://sncftrenitaliadb.com"
    PRICE_API_TIMEOUT_SECONDS: float = 5.0
    CURRENCY: str = "EUR"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Application
    PROJECT_NAME: str = "Train Ticket Estimator"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
