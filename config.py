from dotenv import load_dotenv
import os

load_dotenv()


def engine_options_for(database_uri: str) -> dict:
    """SQLAlchemy engine options for the configured database."""
    if database_uri and database_uri.startswith("postgresql"):
        # Managed PostgreSQL drops idle connections, so test and recycle them
        return {
            'pool_pre_ping': True,
            'pool_recycle': 300,
            'pool_size': 5,
            'max_overflow': 10,
            'pool_timeout': 30,
            'connect_args': {
                'sslmode': os.getenv("DATABASE_SSLMODE", "require"),
                'connect_timeout': 10,
            }
        }
    return {'pool_pre_ping': True}


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///calorie_tracker.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = engine_options_for(SQLALCHEMY_DATABASE_URI)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CLIENT_URL = os.getenv("CLIENT_URL", "*")
    TOKEN_TTL_HOURS = int(os.getenv("TOKEN_TTL_HOURS", "12"))

    # Image host
    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME")
    CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
    CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")
    CLOUDINARY_FOLDER = os.getenv("CLOUDINARY_FOLDER", "food_logs")

    # Food recognition
    SPOONACULAR_API_KEY = os.getenv("SPOONACULAR_API_KEY")
    SPOONACULAR_API_URL = os.getenv(
        "SPOONACULAR_API_URL", "https://api.spoonacular.com/food/images/analyze"
    )
    REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))

    # Uploaded food images live here until the detection request finishes
    TEMP_UPLOAD_DIR = os.getenv("TEMP_UPLOAD_DIR", "temp_food_uploads")
    MAX_IMAGE_BYTES = 5 * 1024 * 1024
    # Whole request body, leaving room for the multipart framing around the image
    MAX_CONTENT_LENGTH = MAX_IMAGE_BYTES + 64 * 1024
