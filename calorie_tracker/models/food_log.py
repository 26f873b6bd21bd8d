import math
from datetime import datetime

from sqlalchemy.orm import validates

from calorie_tracker.extensions import db
from calorie_tracker.utils.enums import MealType
from calorie_tracker.utils.errors import ValidationError

MEAL_TYPES = [e.value for e in MealType]


class FoodLog(db.Model):
    __tablename__ = "food_logs"
    __table_args__ = (
        db.Index("ix_food_logs_user_eaten", "user_id", "eaten_at"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    food_name = db.Column(db.String(255), nullable=False)
    calories = db.Column(db.Float, nullable=False)
    protein = db.Column(db.Float, nullable=False, default=0)
    carbs = db.Column(db.Float, nullable=False, default=0)
    fats = db.Column(db.Float, nullable=False, default=0)
    image_url = db.Column(db.String(1024))
    meal_type = db.Column(db.String(20), nullable=False, default=MealType.SNACK.value)
    eaten_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    @validates("user_id")
    def _validate_owner(self, key, value):
        if value is None:
            raise ValidationError("Food log owner is required", fields=["user"])
        if self.user_id is not None and self.user_id != value:
            raise ValidationError("Food log owner cannot be changed", fields=["user"])
        return value

    @validates("food_name")
    def _validate_food_name(self, key, value):
        name = (value or "").strip() if isinstance(value, str) else ""
        if not name:
            raise ValidationError("Food name must be a non-empty string", fields=["foodName"])
        return name

    @validates("calories")
    def _validate_calories(self, key, value):
        if value is None:
            raise ValidationError("Calories are required", fields=["calories"])
        return _non_negative(value, "calories")

    @validates("protein", "carbs", "fats")
    def _validate_macro(self, key, value):
        if value is None:
            return 0.0
        return _non_negative(value, key)

    @validates("meal_type")
    def _validate_meal_type(self, key, value):
        if value is None:
            return MealType.SNACK.value
        if value not in MEAL_TYPES:
            raise ValidationError(
                f"mealType must be one of: {', '.join(MEAL_TYPES)}", fields=["mealType"]
            )
        return value

    @validates("image_url")
    def _validate_image_url(self, key, value):
        if value is None:
            return None
        return str(value).strip() or None


def _non_negative(value, field: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field} must be a number", fields=[field])
    if not math.isfinite(number) or number < 0:
        raise ValidationError(f"{field} must be a non-negative number", fields=[field])
    return number
