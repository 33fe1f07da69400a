from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000
    message_ttl_seconds: int = 300
    sweep_interval_seconds: float = 60
    keep_alive_timeout: int = 120
    log_level: str = "INFO"


settings = Settings()
