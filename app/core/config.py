from pydantic_settings import BaseSettings
from typing import List, Literal, Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "ClinicSlots"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "password"
    POSTGRES_DB: str = "clinicslots"
    DATABASE_URL: Optional[str] = None

    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    AUTO_CREATE_TABLES: bool = True

    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    DOCTOR_LIST_LIMIT: int = 100
    # 0 disables the lock timeout
    BOOKING_LOCK_TIMEOUT_MS: int = 5000
    # "cascade" destroys confirmed bookings with the slot, "block" refuses the delete
    SLOT_HARD_DELETE_POLICY: Literal["cascade", "block"] = "cascade"
    ALLOW_BOOKING_INACTIVE_SLOTS: bool = True

    class Config:
        case_sensitive = True
        env_file = ".env"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.DATABASE_URL:
            self.DATABASE_URL = f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}/{self.POSTGRES_DB}"

settings = Settings()
