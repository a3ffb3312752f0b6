# app/shared/config.py
from pydantic import BaseModel
import os

class Settings(BaseModel):
    ENV: str = os.getenv("ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # empty -> sqlite file under ./storage/
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # demo auth controls
    # demo token is only honoured when ENV == "dev"
    AUTH_DEMO: bool = os.getenv("AUTH_DEMO", "false").lower() == "true"
    DEMO_TOKEN: str = os.getenv("DEMO_TOKEN", "demo")
    DEMO_EMAIL: str = os.getenv("DEMO_EMAIL", "demo@example.com")

    # JWT settings (for real mode)
    JWT_KEY: str = os.getenv("JWT_KEY", "dev-secret")
    JWT_ALG: str = os.getenv("JWT_ALG", "HS256")
    JWT_ISS: str | None = os.getenv("JWT_ISS")
    JWT_AUD: str | None = os.getenv("JWT_AUD")
    JWT_EXPIRE_MIN: int = int(os.getenv("JWT_EXPIRE_MIN", "60"))
    JWT_REFRESH_EXPIRE_MIN: int = int(os.getenv("JWT_REFRESH_EXPIRE_MIN", str(60 * 24 * 7)))

    # completion provider (OpenAI-compatible; Groq by default)
    LLM_BASE_URL: str = os.getenv("LLM_BASE_URL", "https://api.groq.com/openai/v1")
    LLM_API_KEY: str = os.getenv("LLM_API_KEY", os.getenv("GROQ_API_KEY", ""))
    LLM_DEFAULT_MODEL: str = os.getenv("LLM_DEFAULT_MODEL", "llama3-70b-8192")
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.5"))
    LLM_TIMEOUT: float = float(os.getenv("LLM_TIMEOUT", "60"))

settings = Settings()
