from marshmallow import Schema, fields, validate, EXCLUDE
from calorie_tracker.utils.enums import MealType

class CreateFoodLogSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    food_name = fields.Str(required=True, data_key="foodName", validate=validate.Length(min=1))
    calories = fields.Float(required=True, validate=validate.Range(min=0))
    protein = fields.Float(allow_none=True, validate=validate.Range(min=0))
    carbs = fields.Float(allow_none=True, validate=validate.Range(min=0))
    fats = fields.Float(allow_none=True, validate=validate.Range(min=0))
    meal_type = fields.Str(
        data_key="mealType", allow_none=True,
        validate=validate.OneOf([e.value for e in MealType]),
    )
    eaten_at = fields.DateTime(data_key="eatenAt", allow_none=True)
    image_url = fields.Str(data_key="imageUrl", allow_none=True)

class FoodLogQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    # Calendar days (YYYY-MM-DD), both bounds inclusive
    start_date = fields.Date(data_key="startDate", load_default=None)
    end_date = fields.Date(data_key="endDate", load_default=None)
