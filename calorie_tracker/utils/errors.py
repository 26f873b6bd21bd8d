"""
Error kinds raised by the food log services and the detection pipeline.

Each kind carries a stable code, message and HTTP status so controllers can
render it without inspecting where it came from.
"""

from typing import Any, Dict, Optional


class CalorieTrackerError(Exception):
    code = "UNKNOWN_ERROR"
    message = "Unexpected server error"
    status = 500

    def __init__(self, message: Optional[str] = None, status: Optional[int] = None, **extra):
        self.message = message or self.message
        if status is not None:
            self.status = status
        self.extra: Dict[str, Any] = {k: v for k, v in extra.items() if v is not None}
        super().__init__(self.message)


class ConfigurationError(CalorieTrackerError):
    code = "CONFIGURATION_ERROR"
    message = "Server configuration error: Missing API key."
    status = 500


class NoFileError(CalorieTrackerError):
    code = "IMAGE_REQUIRED"
    message = "No image file uploaded. Please upload an image."
    status = 400


class InvalidFileTypeError(CalorieTrackerError):
    code = "INVALID_FILE_TYPE"
    message = "Only .jpeg, .jpg and .png formats are allowed"
    status = 400


class FileTooLargeError(CalorieTrackerError):
    code = "FILE_TOO_LARGE"
    message = "Image is too large. Maximum size is 5MB."
    status = 413


class ImageHostError(CalorieTrackerError):
    code = "IMAGE_HOST_ERROR"
    message = "Failed to upload image to Cloudinary."
    status = 500


class RecognitionError(CalorieTrackerError):
    code = "RECOGNITION_ERROR"
    message = "Failed to analyze image with Spoonacular."
    status = 502


class UnrecognizedFoodError(CalorieTrackerError):
    code = "UNRECOGNIZED_FOOD"
    message = "Could not extract food data from Spoonacular response. Unexpected format."
    status = 502

    @classmethod
    def missing_fields(cls) -> "UnrecognizedFoodError":
        return cls(
            "Spoonacular API did not return essential food name or calorie data.",
            status=400,
            reason="MISSING_FIELDS",
        )


class ValidationError(CalorieTrackerError):
    code = "VALIDATION_ERROR"
    message = "Invalid food log data"
    status = 400


class InvalidDateError(CalorieTrackerError):
    code = "INVALID_DATE"
    message = "Invalid date format provided for filtering."
    status = 400


class InvalidIdError(CalorieTrackerError):
    code = "INVALID_ID"
    message = "Invalid food log ID format"
    status = 400


class NotFoundError(CalorieTrackerError):
    code = "NOT_FOUND"
    message = "Food log not found"
    status = 404


class ForbiddenError(CalorieTrackerError):
    code = "FORBIDDEN"
    message = "User not authorized to delete this log"
    status = 403
