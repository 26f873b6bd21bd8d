"""
Calorie Controller Module

Handles food log endpoints including:
- Manual food logging
- Listing logs by date range
- Deleting logs
- Logging food detected from a photo
- Today's calorie summary
"""

import logging
from flask import request, current_app
from werkzeug.exceptions import RequestEntityTooLarge

from calorie_tracker.extensions import db
from calorie_tracker.schemas.food_schema import CreateFoodLogSchema, FoodLogQuerySchema
from calorie_tracker.services.food_detection_service import get_detection_pipeline
from calorie_tracker.services.food_log_service import (
    add_food_log,
    delete_food_log,
    list_food_logs,
    today_summary,
)
from calorie_tracker.utils.errors import CalorieTrackerError, FileTooLargeError, InvalidDateError
from calorie_tracker.utils.http import ok, error, error_from, json_body, arg_str, validate_schema
from calorie_tracker.utils.uploads import accept_food_image

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("foodName", "calories")


def add_food_log_handler():
    """
    Log a food manually.

    Body Parameters:
        - foodName (required)
        - calories (required)
        - protein, carbs, fats (optional, default 0)
        - mealType (optional): Breakfast/Lunch/Dinner/Snack (default: Snack)
        - eatenAt (optional): ISO timestamp (default: now)
        - imageUrl (optional)
    """
    user_id = request.user_id
    data = json_body()

    payload, errors = validate_schema(CreateFoodLogSchema, data)
    if errors:
        missing = [f for f in REQUIRED_FIELDS if f in errors and data.get(f) in (None, "")]
        if missing:
            return error("VALIDATION_ERROR", "Food name and calories are required", 400, fields=missing)
        return error("VALIDATION_ERROR", "Invalid food log data", 400, fields=sorted(errors), details=errors)

    try:
        result = add_food_log(user_id, **payload)
        return ok(result, 201)
    except CalorieTrackerError as e:
        db.session.rollback()
        return error_from(e)
    except Exception:
        db.session.rollback()
        logger.exception("Error adding food log")
        return error("UNKNOWN_ERROR", "Server error while adding food log", 500)


def list_food_logs_handler():
    """
    List the current user's food logs, newest first.

    Query Parameters:
        - startDate (optional): YYYY-MM-DD, inclusive
        - endDate (optional): YYYY-MM-DD, inclusive
    """
    user_id = request.user_id

    query = {}
    for name in ("startDate", "endDate"):
        value = arg_str(name)
        if value is not None:
            query[name] = value

    params, errors = validate_schema(FoodLogQuerySchema, query)
    if errors:
        return error_from(InvalidDateError(details=errors))

    try:
        return ok(list_food_logs(user_id, params["start_date"], params["end_date"]))
    except Exception:
        logger.exception("Error fetching food logs with date filter")
        return error("UNKNOWN_ERROR", "Server error while fetching food logs", 500)


def delete_food_log_handler(log_id):
    """Delete one of the current user's food logs."""
    try:
        return ok(delete_food_log(request.user_id, log_id))
    except CalorieTrackerError as e:
        return error_from(e)
    except Exception:
        db.session.rollback()
        logger.exception("Error deleting food log")
        return error("UNKNOWN_ERROR", "Server error while deleting food log", 500)


def detect_food_handler():
    """
    Detect the food in an uploaded photo and log it.

    Multipart Parameters:
        - foodImage (required): JPEG or PNG, at most 5MB
    """
    try:
        pipeline = get_detection_pipeline()
        upload = accept_food_image(
            request.files.get("foodImage"),
            current_app.config["TEMP_UPLOAD_DIR"],
            current_app.config["MAX_IMAGE_BYTES"],
        )
        result = pipeline.detect_and_log(request.user_id, upload)
        return ok(result, 201)
    except CalorieTrackerError as e:
        db.session.rollback()
        return error_from(e)
    except RequestEntityTooLarge:
        return error_from(FileTooLargeError())
    except Exception:
        db.session.rollback()
        logger.exception("Error in food detection")
        return error("UNKNOWN_ERROR", "Server error while detecting food from image.", 500)


def today_summary_handler():
    """Totals of calories and macros logged today."""
    try:
        return ok(today_summary(request.user_id))
    except Exception:
        logger.exception("Error fetching today's calorie summary")
        return error("UNKNOWN_ERROR", "Server error while fetching today's calorie summary.", 500)
