import pytest

from calorie_tracker.services.food_recognition import extract_food_facts, to_float
from calorie_tracker.utils.errors import UnrecognizedFoodError


@pytest.mark.parametrize("value, expected", [
    (250, 250.0),
    ("250", 250.0),
    ("250 kcal", 250.0),
    (" 12.5g", 12.5),
    ("kcal 250", None),
    (None, None),
    (True, None),
    (float("nan"), None),
    (float("inf"), None),
    ("1e400", None),
    (10 ** 400, None),
])
def test_to_float(value, expected):
    assert to_float(value) == expected


def test_nested_nutrition_wins_over_other_shapes():
    facts = extract_food_facts({
        "category": {"name": "burger"},
        "nutrition": {"calories": {"value": 300}, "carbs": {"value": "40"}},
        "results": [{"name": "sandwich", "calories": 100}],
        "annotation": "bread",
        "calories": 50,
    })
    assert facts == {
        "food_name": "burger",
        "calories": 300.0,
        "protein": None,
        "carbs": 40.0,
        "fats": None,
    }


def test_first_result_is_used():
    facts = extract_food_facts({"results": [{"name": " sushi ", "calories": "200"}]})
    assert facts["food_name"] == "sushi"
    assert facts["calories"] == 200.0


def test_annotation_with_zero_calories():
    facts = extract_food_facts({"annotation": "water", "calories": 0})
    assert facts["food_name"] == "water"
    assert facts["calories"] == 0.0


def test_matched_shape_without_calories_is_missing_fields():
    with pytest.raises(UnrecognizedFoodError) as exc:
        extract_food_facts({"results": [{"name": "soup"}]})
    assert exc.value.status == 400
    assert exc.value.extra["reason"] == "MISSING_FIELDS"


def test_matched_shape_without_name_is_missing_fields():
    with pytest.raises(UnrecognizedFoodError) as exc:
        extract_food_facts({"category": {"probability": 0.4}, "nutrition": {"calories": {"value": 90}}})
    assert exc.value.status == 400


def test_empty_nested_nutrition_still_matches_first_shape():
    with pytest.raises(UnrecognizedFoodError) as exc:
        extract_food_facts({"category": {"name": "pie"}, "nutrition": {}})
    assert exc.value.status == 400


def test_empty_category_does_not_fall_through_to_results():
    with pytest.raises(UnrecognizedFoodError) as exc:
        extract_food_facts({
            "category": {},
            "nutrition": {"calories": {"value": 5}},
            "results": [{"name": "sushi", "calories": 200}],
        })
    assert exc.value.status == 400
    assert exc.value.extra["reason"] == "MISSING_FIELDS"


def test_overflowing_calories_count_as_missing():
    with pytest.raises(UnrecognizedFoodError) as exc:
        extract_food_facts({"annotation": "cake", "calories": "1e400"})
    assert exc.value.status == 400


@pytest.mark.parametrize("payload", [
    {},
    {"results": []},
    {"annotation": "", "calories": 100},
    {"category": {"name": "pie"}},
    ["pie", 300],
    None,
])
def test_unknown_shapes_are_unrecognized(payload):
    with pytest.raises(UnrecognizedFoodError) as exc:
        extract_food_facts(payload)
    assert exc.value.status == 502
