import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application settings read from the environment."""

    # Database settings
    DATABASE_URL = os.getenv('DATABASE_URL')

    # API settings
    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', 'http://localhost:5173').split(',') if o.strip()]
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Scan review: names read below this confidence are flagged for the user
    NAME_REVIEW_CONFIDENCE = float(os.getenv('NAME_REVIEW_CONFIDENCE', '0.60'))
