"""
Central configuration module for the launcher.

This module manages all configuration settings including:
- Where cached models live and where downloads are written
- Download timeout and streaming chunk size
- Progress display and logging level

Only the command line reads this module; the resolution core receives
every value as an explicit argument.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Central configuration for the launcher."""

    # Model cache settings
    MODELS_DIR: str = os.getenv("MODELS_DIR", ".")

    # Download settings
    DOWNLOAD_TIMEOUT: float = float(os.getenv("DOWNLOAD_TIMEOUT", "30"))
    DOWNLOAD_CHUNK_SIZE: int = int(os.getenv("DOWNLOAD_CHUNK_SIZE", str(1024 * 1024)))
    SHOW_PROGRESS: bool = os.getenv("SHOW_PROGRESS", "true").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING")

    @classmethod
    def summary(cls) -> dict:
        """
        Get a summary of current configuration.

        Returns:
            Dictionary with all config values
        """
        return {
            "models_dir": cls.MODELS_DIR,
            "download_timeout": cls.DOWNLOAD_TIMEOUT,
            "download_chunk_size": cls.DOWNLOAD_CHUNK_SIZE,
            "show_progress": cls.SHOW_PROGRESS,
            "log_level": cls.LOG_LEVEL,
        }


# Singleton instance
config = Config()
