from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    normal_duration_days: int = 3
    urgent_duration_days: int = 1
    # Window before end_time in which an auction reads as "ending"
    ending_threshold_hours: int = 24
    min_bid_increment: int = 10000
    currency_symbol: str = "₩"
    # Display only; all arithmetic is done in UTC
    display_timezone: str = "Asia/Seoul"
    cors_origins: list[str] = ["http://localhost:8081"]

    class Config:
        env_file = ".env"

settings = Settings()
