"""
Food Recognition Service

Sends food photos to the Spoonacular image analysis API and turns its
variable-shaped response into normalized food facts.

The API has answered in several shapes over time, so the response is decoded
by an ordered list of decoders. The first decoder whose shape matches the
payload decides the outcome.
"""

import logging
import math
import os
import re
from typing import Any, Dict, Optional

import requests

from calorie_tracker.utils.errors import RecognitionError, UnrecognizedFoodError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.spoonacular.com/food/images/analyze"

_LEADING_NUMBER = re.compile(r"\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")


def to_float(value: Any) -> Optional[float]:
    """Parse a leading number ("250 kcal" -> 250.0); None when there is none."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return None
        number = match.group(0)
    try:
        number = float(number)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _present(value: Any) -> bool:
    """Objects and arrays count as present even when empty; scalars by truthiness."""
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def _nested_value(nutrition: Dict[str, Any], key: str) -> Any:
    entry = nutrition.get(key)
    return entry.get("value") if isinstance(entry, dict) else None


# ============================================================================
# Response decoders
# ============================================================================

def decode_category_nutrition(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """{category: {name}, nutrition: {calories: {value}, protein: {value}, ...}}"""
    category = data.get("category")
    nutrition = data.get("nutrition")
    if not _present(category) or not _present(nutrition):
        return None
    if not isinstance(nutrition, dict):
        nutrition = {}
    return {
        "food_name": category.get("name") if isinstance(category, dict) else None,
        "calories": _nested_value(nutrition, "calories"),
        "protein": _nested_value(nutrition, "protein"),
        "carbs": _nested_value(nutrition, "carbs"),
        "fats": _nested_value(nutrition, "fat"),
    }


def decode_first_result(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """{results: [{name, calories}, ...]}"""
    results = data.get("results")
    if not isinstance(results, list) or not results:
        return None
    primary = results[0] if isinstance(results[0], dict) else {}
    return {
        "food_name": primary.get("name"),
        "calories": primary.get("calories"),
    }


def decode_annotation(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """{annotation, calories}"""
    if not data.get("annotation") or data.get("calories") is None:
        return None
    return {
        "food_name": data.get("annotation"),
        "calories": data.get("calories"),
    }


RESPONSE_DECODERS = (
    decode_category_nutrition,
    decode_first_result,
    decode_annotation,
)


def extract_food_facts(payload: Any) -> Dict[str, Any]:
    """
    Decode a recognition response into food facts.

    Returns:
        Dictionary with food_name, calories and optional protein/carbs/fats

    Raises:
        UnrecognizedFoodError: If no decoder matches (502) or the matching
            decoder lacks a food name or calorie value (400)
    """
    if isinstance(payload, dict):
        for decoder in RESPONSE_DECODERS:
            candidate = decoder(payload)
            if candidate is None:
                continue

            name = candidate.get("food_name")
            name = name.strip() if isinstance(name, str) else ""
            calories = to_float(candidate.get("calories"))
            if not name or calories is None:
                logger.warning(f"{decoder.__name__} matched but essential data is missing: {payload}")
                raise UnrecognizedFoodError.missing_fields()

            return {
                "food_name": name,
                "calories": calories,
                "protein": to_float(candidate.get("protein")),
                "carbs": to_float(candidate.get("carbs")),
                "fats": to_float(candidate.get("fats")),
            }

    logger.warning(f"Spoonacular response structure not recognized: {payload}")
    raise UnrecognizedFoodError(reason="UNEXPECTED_FORMAT")


# ============================================================================
# API client
# ============================================================================

def _upstream_message(response) -> str:
    try:
        data = response.json()
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
    except ValueError:
        pass
    return (response.text or "")[:200] or str(response.reason)


class SpoonacularRecognizer:
    """Client for Spoonacular's food image analysis endpoint."""

    def __init__(self, api_key: str, api_url: str = DEFAULT_API_URL, timeout: float = 30):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout

    def analyze(self, path: str) -> Any:
        """
        Stream the image at path to the API and return the decoded JSON body.

        Raises:
            RecognitionError: On transport failure, timeout or an error status
            UnrecognizedFoodError: If the body is not JSON
        """
        try:
            with open(path, "rb") as image:
                response = requests.post(
                    self.api_url,
                    params={"apiKey": self.api_key},
                    files={"file": (os.path.basename(path), image)},
                    timeout=self.timeout,
                )
        except requests.RequestException as e:
            logger.error(f"Spoonacular API request failed: {e}")
            raise RecognitionError(details=str(e))

        if not response.ok:
            detail = _upstream_message(response)
            logger.error(f"Spoonacular API returned {response.status_code}: {detail}")
            raise RecognitionError(status=response.status_code, details=detail)

        try:
            return response.json()
        except ValueError:
            logger.warning("Spoonacular API returned a non-JSON body")
            raise UnrecognizedFoodError(reason="UNEXPECTED_FORMAT")
