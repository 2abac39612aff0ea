"""
Configuration settings for the Winter Clothing Backend
"""

import os
import logging

from utils.helpers import parse_bool, parse_duration

# Configure logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Database configuration
MONGODB_URI = os.getenv("MONGODB_URI")
DB_NAME = os.getenv("DB_NAME", "assignment7")
PORT = int(os.getenv("PORT", 5000))

# Collection names shared with existing deployments
USERS_COLLECTION = "users"
CLOTHS_COLLECTION = "cloths"
TESTIMONIALS_COLLECTION = "testimonials"
COMMENTS_COLLECTION = "comments"

# Token issuance
JWT_SECRET = os.getenv("JWT_SECRET")
JWT_ALGORITHM = "HS256"
EXPIRES_IN = os.getenv("EXPIRES_IN", "1h")

# Password hashing work factor
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 10))

# Testimonial and comment routes are only served by the full variant
ENABLE_COMMUNITY_ROUTES = parse_bool(os.getenv("ENABLE_COMMUNITY_ROUTES", "true"))

# CORS settings
ALLOWED_ORIGINS = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()]

# Validate required environment variables
if not MONGODB_URI:
    raise ValueError("MONGODB_URI environment variable is required")
if not JWT_SECRET:
    raise ValueError("JWT_SECRET environment variable is required")

TOKEN_TTL = parse_duration(EXPIRES_IN)
if TOKEN_TTL.total_seconds() <= 0:
    raise ValueError(f"EXPIRES_IN must be a positive duration, got '{EXPIRES_IN}'")

logger.info(f"Database: {DB_NAME}, token lifetime: {EXPIRES_IN}, community routes: {ENABLE_COMMUNITY_ROUTES}")
