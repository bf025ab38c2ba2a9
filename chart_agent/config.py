"""
Global Configuration Settings

Centralized configuration for the chart agent.
Controls the model connection, chart persistence, upload limits and logging.
"""

import os
from typing import Optional
import logging

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# .env.local overrides .env, matching the web front-end conventions
load_dotenv(".env.local")
load_dotenv()


class AppConfig:
    """Global application configuration."""

    def __init__(self):
        # OpenAI Configuration
        self.OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY")
        self.OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
        self.OPENAI_TEMPERATURE = self._get_float_env("OPENAI_TEMPERATURE", default=0.0)

        # Chart Configuration
        self.CHART_OUTPUT_DIR = os.getenv("CHART_OUTPUT_DIR", "./public/charts")
        self.SAVE_CHARTS = self._get_bool_env("SAVE_CHARTS", default=True)
        self.MAX_TOOL_STEPS = self._get_int_env("MAX_TOOL_STEPS", default=5)

        # Upload Configuration
        self.MAX_UPLOAD_MB = self._get_int_env("MAX_UPLOAD_MB", default=10)

        # HTTP Configuration
        self.CHAT_RATE_LIMIT = os.getenv("CHAT_RATE_LIMIT", "30/minute")
        self.ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()]

        # Logging Configuration
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

        # Development/Debug Configuration
        self.DEBUG_MODE = self._get_bool_env("DEBUG_MODE", default=False)

    def _get_bool_env(self, key: str, default: bool = False) -> bool:
        """Get boolean value from environment variable."""
        value = os.getenv(key, "").lower()
        if value in ("true", "1", "yes", "on"):
            return True
        elif value in ("false", "0", "no", "off"):
            return False
        else:
            return default

    def _get_int_env(self, key: str, default: int) -> int:
        value = os.getenv(key)
        if value is None or not value.strip():
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Invalid integer for {key}: {value!r}, using {default}")
            return default

    def _get_float_env(self, key: str, default: float) -> float:
        value = os.getenv(key)
        if value is None or not value.strip():
            return default
        try:
            return float(value)
        except ValueError:
            logger.warning(f"Invalid number for {key}: {value!r}, using {default}")
            return default

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_MB * 1024 * 1024

    def log_configuration(self):
        """Log the current configuration settings."""
        logger.info("🔧 Chart Agent Configuration:")
        logger.info(f"   OpenAI Model: {self.OPENAI_MODEL}")
        logger.info(f"   API Key: {'✅ SET' if self.OPENAI_API_KEY else '❌ MISSING'}")
        logger.info(f"   Chart Output Dir: {self.CHART_OUTPUT_DIR}")
        logger.info(f"   Save Charts: {'✅ ENABLED' if self.SAVE_CHARTS else '❌ DISABLED'}")
        logger.info(f"   Max Tool Steps: {self.MAX_TOOL_STEPS}")
        logger.info(f"   Max Upload: {self.MAX_UPLOAD_MB}MB")
        logger.info(f"   Debug Mode: {'✅ ENABLED' if self.DEBUG_MODE else '❌ DISABLED'}")
        logger.info(f"   Log Level: {self.LOG_LEVEL}")

    def get_summary(self) -> dict:
        """Get a summary of current configuration."""
        return {
            "openai_model": self.OPENAI_MODEL,
            "api_key_configured": bool(self.OPENAI_API_KEY),
            "chart_output_dir": self.CHART_OUTPUT_DIR,
            "save_charts": self.SAVE_CHARTS,
            "max_tool_steps": self.MAX_TOOL_STEPS,
            "max_upload_mb": self.MAX_UPLOAD_MB,
            "debug_mode": self.DEBUG_MODE,
            "log_level": self.LOG_LEVEL,
        }


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for an entry point."""
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


# Global configuration instance
config = AppConfig()


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    return config


# Environment variable documentation
ENV_VARS_HELP = """
Environment Variables for Configuration:

🤖 OpenAI:
   OPENAI_API_KEY=sk-...              # OpenAI API key
   OPENAI_MODEL=gpt-4o                # Chat model used for tool calling
   OPENAI_TEMPERATURE=0               # Sampling temperature

📊 Charts:
   CHART_OUTPUT_DIR=./public/charts   # Where rendered SVG files are written
   SAVE_CHARTS=true|false             # Persist rendered charts (default: true)
   MAX_TOOL_STEPS=5                   # Model/tool round-trips per request

📁 Uploads:
   MAX_UPLOAD_MB=10                   # Maximum spreadsheet size

🌐 HTTP:
   CHAT_RATE_LIMIT=30/minute          # Rate limit for the chat endpoint
   ALLOWED_ORIGINS=*                  # Comma separated CORS origins

🐛 Development:
   DEBUG_MODE=true|false              # Enable API docs (default: false)
   LOG_LEVEL=INFO|DEBUG|WARNING       # Logging level (default: INFO)
"""
