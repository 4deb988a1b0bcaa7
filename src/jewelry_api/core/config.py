import os

# In a real deployment every value below comes from the environment
SECRET_KEY: str = os.getenv(
    "SECRET_KEY", "your-secret-key-for-jwt-!ChangeMe!"
)  # TODO: Refuse to start with the placeholder key outside development
ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./jewelry_inventory.sqlite3")
GENERATE_SCHEMAS: bool = os.getenv("GENERATE_SCHEMAS", "true").lower() in ("true", "1", "t")

# Role assumed for users whose stored record carries no role
DEFAULT_ROLE: str = os.getenv("DEFAULT_ROLE", "worker")

CORS_ORIGINS: list[str] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

RATE_LIMIT: str = os.getenv("RATE_LIMIT", "100/15minutes")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() in ("true", "1", "t")

DEFAULT_GOLD_RATE: float = float(os.getenv("DEFAULT_GOLD_RATE", "5500"))
DEFAULT_SILVER_RATE: float = float(os.getenv("DEFAULT_SILVER_RATE", "75"))
