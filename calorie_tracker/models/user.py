from datetime import datetime

from calorie_tracker.extensions import db

class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.now, nullable=False)

    food_logs = db.relationship("FoodLog", backref="user", lazy="dynamic", cascade="all, delete-orphan")
