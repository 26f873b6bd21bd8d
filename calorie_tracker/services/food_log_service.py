"""
Food Log Service

Handles food log operations: manual creation, date-bounded listing,
owner-checked deletion and today's calorie/macro summary.
"""

import logging
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional
from sqlalchemy import desc

from calorie_tracker.extensions import db
from calorie_tracker.models.food_log import FoodLog
from calorie_tracker.utils.errors import (
    ForbiddenError,
    InvalidIdError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59, 999000)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def _local_naive(value: datetime) -> datetime:
    # eaten_at is stored as naive server-local time so day bounds line up
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def serialize_food_log(log: FoodLog) -> Dict[str, Any]:
    return {
        "id": log.id,
        "user": log.user_id,
        "foodName": log.food_name,
        "calories": float(log.calories),
        "protein": float(log.protein or 0),
        "carbs": float(log.carbs or 0),
        "fats": float(log.fats or 0),
        "imageUrl": log.image_url,
        "mealType": log.meal_type,
        "eatenAt": _isoformat(log.eaten_at),
        "createdAt": _isoformat(log.created_at),
        "updatedAt": _isoformat(log.updated_at),
    }


def add_food_log(
    user_id: int,
    food_name: Optional[str],
    calories: Any,
    protein: Any = None,
    carbs: Any = None,
    fats: Any = None,
    meal_type: Optional[str] = None,
    eaten_at: Optional[datetime] = None,
    image_url: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a food log entry owned by user_id.

    Args:
        user_id: Owner of the entry
        food_name: Name of the food (required)
        calories: Calorie value (required, non-negative)
        protein, carbs, fats: Optional macros in grams, default 0
        meal_type: Breakfast, Lunch, Dinner or Snack (default: Snack)
        eaten_at: When the food was eaten (default: now)
        image_url: Optional hosted image of the food

    Returns:
        Serialized food log

    Raises:
        ValidationError: If required fields are missing or a value is rejected
    """
    missing = []
    if not isinstance(food_name, str) or not food_name.strip():
        missing.append("foodName")
    if calories is None:
        missing.append("calories")
    if missing:
        raise ValidationError("Food name and calories are required", fields=missing)

    food_log = FoodLog(
        user_id=user_id,
        food_name=food_name,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fats=fats,
        meal_type=meal_type,
        eaten_at=_local_naive(eaten_at) if eaten_at else datetime.now(),
        image_url=image_url,
    )
    db.session.add(food_log)
    db.session.commit()

    logger.info(f"Food log {food_log.id} created for user {user_id}: {food_log.food_name}")
    return serialize_food_log(food_log)


def _logs_between(user_id: int, lower: Optional[datetime], upper: Optional[datetime]):
    query = FoodLog.query.filter_by(user_id=user_id)
    if lower is not None:
        query = query.filter(FoodLog.eaten_at >= lower)
    if upper is not None:
        query = query.filter(FoodLog.eaten_at <= upper)
    return query


def list_food_logs(
    user_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """
    List a user's food logs, newest first.

    Either bound may be omitted; both are whole calendar days and inclusive.
    """
    lower = start_of_day(start_date) if start_date else None
    upper = end_of_day(end_date) if end_date else None

    logs = (
        _logs_between(user_id, lower, upper)
        .order_by(desc(FoodLog.eaten_at))
        .all()
    )
    return [serialize_food_log(log) for log in logs]


def delete_food_log(user_id: int, log_id: Any) -> Dict[str, str]:
    """Delete a food log owned by user_id."""
    try:
        log_id = int(log_id)
    except (TypeError, ValueError):
        raise InvalidIdError()

    food_log = db.session.get(FoodLog, log_id)
    if food_log is None:
        raise NotFoundError()

    if food_log.user_id != user_id:
        raise ForbiddenError()

    db.session.delete(food_log)
    db.session.commit()
    return {"message": "Food log deleted successfully"}


def today_summary(user_id: int, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Sum calories and macros of the logs eaten today (server local time)."""
    today = (now or datetime.now()).date()
    logs = _logs_between(user_id, start_of_day(today), end_of_day(today)).all()

    summary = {
        "totalCalories": 0.0,
        "totalProtein": 0.0,
        "totalCarbs": 0.0,
        "totalFats": 0.0,
        "logCount": len(logs),
    }
    for log in logs:
        summary["totalCalories"] += float(log.calories or 0)
        summary["totalProtein"] += float(log.protein or 0)
        summary["totalCarbs"] += float(log.carbs or 0)
        summary["totalFats"] += float(log.fats or 0)

    return summary
