import datetime as dt
import pytest

from calorie_tracker import create_app
from calorie_tracker.extensions import db
from calorie_tracker.models.user import User
from calorie_tracker.models.food_log import FoodLog
from calorie_tracker.services.food_log_service import today_summary
from calorie_tracker.utils.auth import create_token


@pytest.fixture()
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "SECRET_KEY": "test-secret-key-for-the-calorie-tracker",
        "TEMP_UPLOAD_DIR": str(tmp_path / "uploads"),
    })
    with app.app_context():
        db.create_all()
        db.session.add(User(full_name="Owner", email="owner@example.com"))
        db.session.add(User(full_name="Other", email="other@example.com"))
        db.session.commit()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def user_id(email="owner@example.com"):
    return User.query.filter_by(email=email).first().id


def auth_headers(email="owner@example.com"):
    return {"Authorization": f"Bearer {create_token(user_id(email))}"}


def add_log(email="owner@example.com", **fields):
    values = {"food_name": "Apple", "calories": 95}
    values.update(fields)
    log = FoodLog(user_id=user_id(email), **values)
    db.session.add(log)
    db.session.commit()
    return log


def test_add_food_log_defaults(client):
    r = client.post("/api/v1/calories", json={"foodName": "Banana", "calories": 105},
                    headers=auth_headers())
    assert r.status_code == 201, r.data
    body = r.get_json()
    assert body["foodName"] == "Banana"
    assert body["calories"] == 105
    assert body["protein"] == 0 and body["carbs"] == 0 and body["fats"] == 0
    assert body["mealType"] == "Snack"
    assert body["user"] == user_id()
    assert body["eatenAt"] is not None

    r2 = client.get("/api/v1/calories", headers=auth_headers())
    assert r2.status_code == 200
    logs = r2.get_json()
    assert [(l["foodName"], l["calories"]) for l in logs] == [("Banana", 105)]


def test_add_food_log_with_all_fields(client):
    r = client.post("/api/v1/calories", headers=auth_headers(), json={
        "foodName": "  Oatmeal ",
        "calories": "150.5",
        "protein": 5,
        "carbs": 27,
        "fats": 3,
        "mealType": "Breakfast",
        "eatenAt": "2023-01-01T08:30:00",
        "imageUrl": "https://img.example.com/oats.jpg",
    })
    assert r.status_code == 201, r.data
    body = r.get_json()
    assert body["foodName"] == "Oatmeal"
    assert body["calories"] == 150.5
    assert body["mealType"] == "Breakfast"
    assert body["eatenAt"] == "2023-01-01T08:30:00"
    assert body["imageUrl"] == "https://img.example.com/oats.jpg"


def test_add_food_log_requires_name_and_calories(client):
    r = client.post("/api/v1/calories", json={"mealType": "Lunch"}, headers=auth_headers())
    assert r.status_code == 400
    body = r.get_json()
    assert body["message"] == "Food name and calories are required"
    assert body["fields"] == ["foodName", "calories"]
    assert FoodLog.query.count() == 0


def test_add_food_log_rejects_unknown_meal_type(client):
    r = client.post("/api/v1/calories", headers=auth_headers(),
                    json={"foodName": "Soup", "calories": 80, "mealType": "Brunch"})
    assert r.status_code == 400
    assert "mealType" in r.get_json()["fields"]
    assert FoodLog.query.count() == 0


def test_add_food_log_rejects_negative_calories(client):
    r = client.post("/api/v1/calories", headers=auth_headers(),
                    json={"foodName": "Soup", "calories": -5})
    assert r.status_code == 400
    assert r.get_json()["code"] == "VALIDATION_ERROR"


def test_list_food_logs_inclusive_day_bounds(client):
    add_log(food_name="Before", eaten_at=dt.datetime(2022, 12, 31, 23, 59, 59))
    add_log(food_name="Start", eaten_at=dt.datetime(2023, 1, 1, 0, 0, 0))
    add_log(food_name="End", eaten_at=dt.datetime(2023, 1, 2, 23, 59, 59, 999000))
    add_log(food_name="After", eaten_at=dt.datetime(2023, 1, 3, 0, 0, 0))

    r = client.get("/api/v1/calories?startDate=2023-01-01&endDate=2023-01-02", headers=auth_headers())
    assert r.status_code == 200
    assert [l["foodName"] for l in r.get_json()] == ["End", "Start"]

    r = client.get("/api/v1/calories?startDate=2023-01-01", headers=auth_headers())
    assert [l["foodName"] for l in r.get_json()] == ["After", "End", "Start"]

    r = client.get("/api/v1/calories?endDate=2023-01-02", headers=auth_headers())
    assert [l["foodName"] for l in r.get_json()] == ["End", "Start", "Before"]


def test_list_food_logs_invalid_date(client):
    r = client.get("/api/v1/calories?startDate=yesterday", headers=auth_headers())
    assert r.status_code == 400
    assert r.get_json()["message"] == "Invalid date format provided for filtering."


def test_list_food_logs_scoped_to_caller(client):
    add_log(food_name="Mine")
    add_log(email="other@example.com", food_name="Theirs")

    r = client.get("/api/v1/calories", headers=auth_headers())
    assert [l["foodName"] for l in r.get_json()] == ["Mine"]


def test_delete_food_log_by_owner_once(client):
    log_id = add_log().id

    r = client.delete(f"/api/v1/calories/{log_id}", headers=auth_headers())
    assert r.status_code == 200
    assert r.get_json()["message"] == "Food log deleted successfully"
    assert db.session.get(FoodLog, log_id) is None

    r2 = client.delete(f"/api/v1/calories/{log_id}", headers=auth_headers())
    assert r2.status_code == 404
    assert r2.get_json()["message"] == "Food log not found"


def test_delete_food_log_by_other_user_is_forbidden(client):
    log_id = add_log().id

    r = client.delete(f"/api/v1/calories/{log_id}", headers=auth_headers("other@example.com"))
    assert r.status_code == 403
    assert r.get_json()["message"] == "User not authorized to delete this log"
    assert db.session.get(FoodLog, log_id) is not None


def test_delete_food_log_invalid_id(client):
    r = client.delete("/api/v1/calories/not-a-number", headers=auth_headers())
    assert r.status_code == 400
    assert r.get_json()["message"] == "Invalid food log ID format"


def test_today_summary(client):
    today_noon = dt.datetime.now().replace(hour=12, minute=0, second=0, microsecond=0)
    add_log(food_name="Eggs", calories=150, protein=12, carbs=1, fats=10, eaten_at=today_noon)
    add_log(food_name="Rice", calories=200, carbs=45, eaten_at=today_noon.replace(hour=13))
    add_log(food_name="Yesterday", calories=999, eaten_at=today_noon - dt.timedelta(days=1))
    add_log(email="other@example.com", food_name="Not mine", calories=500, eaten_at=today_noon)

    r = client.get("/api/v1/calories/summary/today", headers=auth_headers())
    assert r.status_code == 200
    assert r.get_json() == {
        "totalCalories": 350,
        "totalProtein": 12,
        "totalCarbs": 46,
        "totalFats": 10,
        "logCount": 2,
    }


def test_today_summary_empty(client):
    r = client.get("/api/v1/calories/summary/today", headers=auth_headers())
    assert r.get_json() == {
        "totalCalories": 0,
        "totalProtein": 0,
        "totalCarbs": 0,
        "totalFats": 0,
        "logCount": 0,
    }


def test_today_summary_uses_day_of_now(app):
    now = dt.datetime(2024, 3, 10, 18, 0)
    add_log(calories=100, eaten_at=dt.datetime(2024, 3, 10, 0, 0))
    add_log(calories=50, eaten_at=dt.datetime(2024, 3, 10, 23, 59, 59, 999000))
    add_log(calories=25, eaten_at=dt.datetime(2024, 3, 11, 0, 0))

    summary = today_summary(user_id(), now=now)
    assert summary["totalCalories"] == 150
    assert summary["logCount"] == 2


def test_owner_cannot_be_reassigned(app):
    from calorie_tracker.utils.errors import ValidationError

    log = add_log()
    with pytest.raises(ValidationError):
        log.user_id = user_id("other@example.com")


def test_requires_bearer_token(client):
    r = client.get("/api/v1/calories")
    assert r.status_code == 401
    assert r.get_json()["code"] == "UNAUTHORIZED"

    r2 = client.get("/api/v1/calories", headers={"Authorization": "Bearer garbage"})
    assert r2.status_code == 401


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json()["database"] == "healthy"


def test_infinite_calories_are_rejected(app):
    from calorie_tracker.utils.errors import ValidationError

    with pytest.raises(ValidationError):
        FoodLog(user_id=user_id(), food_name="Cake", calories=float("inf"))
    with pytest.raises(ValidationError):
        FoodLog(user_id=user_id(), food_name="Cake", calories=100, fats="1e400")
