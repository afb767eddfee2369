"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # Catalog
    CATALOG_PATH = os.getenv("CATALOG_PATH", "testdata/catalog.json")

    # Output
    LIST_FORMAT = os.getenv("LIST_FORMAT", "plain")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
