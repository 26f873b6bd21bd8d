"""
Food Detection Service

Turns one uploaded food photo into one persisted food log:
host the image, ask the recognition API what it is, then save the entry.
The temporary upload is removed exactly once, whatever the outcome.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from flask import current_app

from calorie_tracker.services.food_log_service import add_food_log
from calorie_tracker.services.food_recognition import (
    DEFAULT_API_URL,
    SpoonacularRecognizer,
    extract_food_facts,
)
from calorie_tracker.services.image_host import CloudinaryImageHost
from calorie_tracker.utils.errors import ConfigurationError, NoFileError
from calorie_tracker.utils.uploads import TempUpload, discard_temp_file

logger = logging.getLogger(__name__)

EXTENSION_KEY = "food_detection_pipeline"


@dataclass(frozen=True)
class DetectionConfig:
    spoonacular_api_key: str
    spoonacular_api_url: str = DEFAULT_API_URL
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None
    cloudinary_folder: str = "food_logs"
    request_timeout: float = 30

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "DetectionConfig":
        """Build from Flask config keys; the recognition API key is mandatory."""
        api_key = config.get("SPOONACULAR_API_KEY")
        if not api_key:
            logger.error("Spoonacular API key is missing.")
            raise ConfigurationError()
        return cls(
            spoonacular_api_key=api_key,
            spoonacular_api_url=config.get("SPOONACULAR_API_URL") or DEFAULT_API_URL,
            cloudinary_cloud_name=config.get("CLOUDINARY_CLOUD_NAME"),
            cloudinary_api_key=config.get("CLOUDINARY_API_KEY"),
            cloudinary_api_secret=config.get("CLOUDINARY_API_SECRET"),
            cloudinary_folder=config.get("CLOUDINARY_FOLDER") or "food_logs",
            request_timeout=float(config.get("REQUEST_TIMEOUT_SECONDS") or 30),
        )


class FoodDetectionPipeline:
    def __init__(self, config: DetectionConfig, image_host=None, recognizer=None):
        self.config = config
        self.image_host = image_host or CloudinaryImageHost(
            cloud_name=config.cloudinary_cloud_name,
            api_key=config.cloudinary_api_key,
            api_secret=config.cloudinary_api_secret,
            folder=config.cloudinary_folder,
            timeout=config.request_timeout,
        )
        self.recognizer = recognizer or SpoonacularRecognizer(
            api_key=config.spoonacular_api_key,
            api_url=config.spoonacular_api_url,
            timeout=config.request_timeout,
        )

    def detect_and_log(self, user_id: int, upload: Optional[TempUpload]) -> Dict[str, Any]:
        """
        Detect the food in an uploaded image and log it for user_id.

        Steps run in order and each external call is attempted once:
        image host upload, recognition call, response decoding, persistence.

        Returns:
            Serialized food log with imageUrl set to the hosted image

        Raises:
            NoFileError: If no image was uploaded
            ImageHostError: If the image host upload fails
            RecognitionError: If the recognition API call fails
            UnrecognizedFoodError: If the recognition response can't be used
            ValidationError: If the food log store rejects the entry
        """
        if upload is None:
            raise NoFileError()

        try:
            image_url = self.image_host.upload(upload.path)
            payload = self.recognizer.analyze(upload.path)
            facts = extract_food_facts(payload)
            logger.info(f"Detected '{facts['food_name']}' ({facts['calories']} kcal) for user {user_id}")

            return add_food_log(
                user_id,
                food_name=facts["food_name"],
                calories=facts["calories"],
                protein=facts.get("protein"),
                carbs=facts.get("carbs"),
                fats=facts.get("fats"),
                image_url=image_url,
            )
        finally:
            discard_temp_file(upload.path)


def get_detection_pipeline() -> FoodDetectionPipeline:
    """Return the app's pipeline, building it from app config on first use."""
    pipeline = current_app.extensions.get(EXTENSION_KEY)
    if pipeline is None:
        pipeline = FoodDetectionPipeline(DetectionConfig.from_mapping(current_app.config))
        current_app.extensions[EXTENSION_KEY] = pipeline
    return pipeline
