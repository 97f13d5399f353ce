# Routes package - registers all blueprints with the Flask app

def register_blueprints(app):
    """Register all route blueprints with the Flask app."""
    from .beacon_stats import beacon_stats_bp

    app.register_blueprint(beacon_stats_bp)
