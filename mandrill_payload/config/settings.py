"""
Environment settings loaded from .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# --- Logging ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
MAX_BODY_LOG_CHARS: int = int(os.getenv("MAX_BODY_LOG_CHARS", "200"))

# --- Payload ---
VALIDATE_PAYLOAD: bool = os.getenv("VALIDATE_PAYLOAD", "true").lower() == "true"

# --- Send request ---
SEND_ASYNC: bool = os.getenv("SEND_ASYNC", "false").lower() == "true"
