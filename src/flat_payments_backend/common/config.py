'''
Holds all the configurations
'''
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Manages application configuration using environment variables.
    """
    # Application Metadata
    APP_NAME: str = "Flat Payments Backend"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "The backend API for managing rental flats and their monthly payments."
    TEST_MODE: bool = False

    # Database URL
    DATABASE_URL_PROD: str = "postgresql+psycopg://localhost/flat_payments"
    DATABASE_URL_TEST: str = "sqlite+aiosqlite:///:memory:"
    @property
    def database_url(self) -> str:
        """
        Dynamically returns the correct database URL based on the test_mode flag.
        """
        if self.TEST_MODE:
            return self.DATABASE_URL_TEST
        return self.DATABASE_URL_PROD

    # JWT Settings (tokens are issued by the external identity provider)
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    BACKEND_CORS_ORIGINS: list[str] = []

    # Other settings
    CURRENCY_CODE: str = "PLN"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env") # automatically loads the .env

# Create a single, importable instance of the settings
settings = Settings()
