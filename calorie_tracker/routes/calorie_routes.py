from flask import Blueprint
from calorie_tracker.utils.auth import require_auth
from calorie_tracker.controllers.calorie_controller import (
    add_food_log_handler,
    list_food_logs_handler,
    delete_food_log_handler,
    detect_food_handler,
    today_summary_handler,
)

calorie_bp = Blueprint("calories", __name__, url_prefix="/api/v1/calories")

@calorie_bp.post("/detect")
@require_auth
def detect_food():
    return detect_food_handler()


@calorie_bp.post("")
@require_auth
def add_food_log():
    return add_food_log_handler()


@calorie_bp.get("")
@require_auth
def list_food_logs():
    return list_food_logs_handler()


@calorie_bp.delete("/<log_id>")
@require_auth
def delete_food_log(log_id):
    return delete_food_log_handler(log_id)


@calorie_bp.get("/summary/today")
@require_auth
def today_summary():
    return today_summary_handler()
