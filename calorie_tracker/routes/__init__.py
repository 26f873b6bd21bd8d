from .home_routes import home_bp
from .calorie_routes import calorie_bp

def register_routes(app):
    app.register_blueprint(home_bp)
    app.register_blueprint(calorie_bp)
