"""
Image Host

Uploads food photos to Cloudinary and returns their durable HTTPS URL.
"""

import logging

import cloudinary.uploader

from calorie_tracker.utils.errors import ImageHostError

logger = logging.getLogger(__name__)


class CloudinaryImageHost:
    """Cloudinary upload client bound to one account and folder."""

    def __init__(self, cloud_name, api_key, api_secret, folder="food_logs", timeout=30):
        self.folder = folder
        self.timeout = timeout
        # Credentials travel with each call instead of the global cloudinary.config()
        self._options = {
            "cloud_name": cloud_name,
            "api_key": api_key,
            "api_secret": api_secret,
            "secure": True,
        }

    def upload(self, path: str) -> str:
        """
        Upload the file at path.

        Returns:
            The secure URL of the hosted image

        Raises:
            ImageHostError: If the upload fails or returns no URL
        """
        try:
            result = cloudinary.uploader.upload(
                path,
                folder=self.folder,
                timeout=self.timeout,
                **self._options,
            )
        except Exception as e:
            logger.error(f"Cloudinary upload failed for {path}: {e}")
            raise ImageHostError(details=str(e))

        url = (result or {}).get("secure_url")
        if not url:
            logger.error(f"Cloudinary upload for {path} returned no secure_url: {result}")
            raise ImageHostError(details="Cloudinary response did not include secure_url")
        return url
