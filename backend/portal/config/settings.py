import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load the appropriate environment file
env_file = '.env.local' # if local or prod or staging
load_dotenv(env_file)

DEFAULT_DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), 'data')

class Settings(BaseSettings):
    """Application settings."""
    # App settings
    APP_ENV: str = os.getenv('APP_ENV', 'production')
    PORT: int = int(os.getenv('PORT', 3001))

    # Flat-file storage
    DATA_DIR: str = os.getenv('DATA_DIR', DEFAULT_DATA_DIR)

    # Session cookie
    SESSION_SECRET: str = os.getenv('SESSION_SECRET', 'your-secret-key')
    SESSION_MAX_AGE: int = int(os.getenv('SESSION_MAX_AGE', 24 * 60 * 60))  # 24 hours

    # Admin credentials (single account, read from the environment)
    ADMIN_USERNAME: str = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD: str = os.getenv('ADMIN_PASSWORD', 'admin123')

    # CORS
    FRONTEND_URL: str = os.getenv('FRONTEND_URL', '')
    ALLOW_ALL_ORIGINS: bool = os.getenv('ALLOW_ALL_ORIGINS', 'false').lower() == 'true'

    # API settings
    API_TITLE: str = "Feedback Portal API"
    API_DESCRIPTION: str = "Anonymous feedback collection and review API"
    API_VERSION: str = "1.0.0"
    API_DOCS_URL: str = "/api/docs"
    API_REDOC_URL: str = "/api/redoc"
    API_OPENAPI_URL: str = "/api/openapi.json"

    # Analytics
    COMMON_WORDS_LIMIT: int = int(os.getenv('COMMON_WORDS_LIMIT', 10))
    COMMON_WORDS_MIN_LENGTH: int = int(os.getenv('COMMON_WORDS_MIN_LENGTH', 4))

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == 'production'

    class Config:
        env_file = env_file
        extra = 'ignore'

settings = Settings()
