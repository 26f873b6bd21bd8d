import logging
from datetime import datetime

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from calorie_tracker.extensions import db

logger = logging.getLogger(__name__)

def home_index():
    return jsonify({
        "message": "Calorie tracker API is running",
    })

def health_check():
    db_status = "healthy"
    try:
        # Ping the database
        db.session.execute(db.text('SELECT 1'))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        db_status = "unhealthy"

    return jsonify({
        "status": "online",
        "database": db_status,
        "server_time": datetime.now().isoformat(),
    }), 200 if db_status == "healthy" else 503
