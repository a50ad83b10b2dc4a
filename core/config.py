from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 9100
    DEV: bool = False
    PROC_PATH: str = "/proc"
    NAMESPACE: str = "node"
    LOG_LEVEL: str = "INFO"

settings = Settings()
