from pydantic_settings import BaseSettings
from typing import List, Union
from pydantic import field_validator, ValidationInfo
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # API Settings
    API_V1_STR: str = ""
    PROJECT_NAME: str = "Jobly API"
    ENVIRONMENT: str = "development"  # development, test, production

    # Database Settings
    POSTGRES_USER: str = "user"
    POSTGRES_PASSWORD: str = "password"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: str = "5432"
    POSTGRES_DB: str = "jobly"
    POSTGRES_TEST_DB: str = "jobly_test"
    CREATE_TABLES: bool = False

    @property
    def DATABASE_URL(self) -> str:
        db_name = self.POSTGRES_TEST_DB if self.ENVIRONMENT == "test" else self.POSTGRES_DB
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{db_name}"

    # JWT Settings
    SECRET_KEY: str = "secret-dev"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Speed up bcrypt during tests, since the algorithm safety isn't being tested
    BCRYPT_WORK_FACTOR: int = 12

    @field_validator("BCRYPT_WORK_FACTOR")
    @classmethod
    def use_test_work_factor(cls, v: int, info: ValidationInfo) -> int:
        """Drop to bcrypt's minimum cost in the test environment"""
        if info.data.get("ENVIRONMENT") == "test":
            return 4
        return v

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    # CORS Settings - can be set as JSON string in .env
    BACKEND_CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Union[List[str], str]) -> List[str]:
        """Parse CORS origins from JSON string or list"""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # If not valid JSON, split by comma
                return [origin.strip() for origin in v.split(",")]
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
