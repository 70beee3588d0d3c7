"""Configuration and runtime constants."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# API Keys
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")

# Model Configuration
MODEL_NAME = os.getenv("MODEL_NAME", "gemini-2.0-flash")
GEMINI_API_BASE = os.getenv(
    "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
)

# Image Configuration
ACCEPTED_MIME_PREFIX = "image/"  # advisory only, never enforced
DEFAULT_MIME_TYPE = "application/octet-stream"

# Directory Configuration
BASE_DIR = Path(__file__).parent.parent
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", str(BASE_DIR / "output")))

# File paths
OUTPUT_CSV = OUTPUT_DIR / "英文生字字卡.csv"

# CSV Configuration
CSV_HEADER = ("English Word", "Chinese Translation")
LOCALIZED_CSV_HEADER = ("英文單字", "中文翻譯")

# Testing Configuration
LIVE_TESTING = os.getenv("IMAGE_VOCAB_LIVE", "0") == "1"
