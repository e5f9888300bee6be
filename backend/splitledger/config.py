import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from the package directory or its parent
env_path = Path(__file__).parent / '.env'
if not env_path.exists():
    env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or SECRET_KEY
    # Unset or empty selects the in-memory stores
    MONGO_URI = os.getenv('MONGO_URI')

    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:5173').split(',')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Shadow accounts created from a name mention during expense entry
    SHADOW_EMAIL_DOMAIN = os.environ.get('SHADOW_EMAIL_DOMAIN', 'example.com')
    SHADOW_PASSWORD = os.environ.get('SHADOW_PASSWORD', 'defaultpassword')

    TESTING = False


class TestConfig(Config):
    TESTING = True
    MONGO_URI = None
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET_KEY = 'test-jwt-secret-key-with-enough-length'
    LOG_LEVEL = 'DEBUG'
