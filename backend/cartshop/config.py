from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./shopping.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8080
    FRONTEND_ORIGINS: List[str] = [
        "http://localhost:3000",
        "https://flourishing-flan-d0885b.netlify.app",
    ]
    SEED_CATALOG: bool = True
    # copy item/qty pairs into order_lines when an order is placed
    ORDER_LINE_SNAPSHOT: bool = True
    BCRYPT_ROUNDS: int = 12
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
