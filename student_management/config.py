from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./students.db"
    SECRET_KEY: str = "dev-secret-students"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12
    LOG_LEVEL: str = "INFO"
    LOGIN_RATE_LIMIT: str = "10/minute"
    RATE_LIMIT_ENABLED: bool = True
    SEED_ON_STARTUP: bool = True

    # учётка по умолчанию для первого входа
    ADMIN_EMAIL: str = "admin@example.com"
    ADMIN_PASSWORD: str = "password123"
    ADMIN_NAME: str = "Admin User"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
