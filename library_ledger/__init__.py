from flask import Flask, jsonify

from library_ledger.config import Config
from library_ledger.extensions import db, migrate


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    app.url_map.strict_slashes = False

    # 1) db + migrations
    db.init_app(app)
    migrate.init_app(app, db)

    # 2) models must be imported before create_all
    from library_ledger.models import book, borrow  # noqa: F401

    if app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            db.create_all()
        app.logger.info("[db] Tables ensured (books, borrows).")

    # 3) API blueprints
    from library_ledger.controllers.book_controller import book_bp
    from library_ledger.controllers.borrow_controller import borrow_bp
    app.register_blueprint(book_bp, url_prefix="/api/books")
    app.register_blueprint(borrow_bp, url_prefix="/api/borrow")

    @app.get("/")
    def index():
        return "Library Management API is running"

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    @app.errorhandler(404)
    def not_found(_e):
        return jsonify({"success": False, "message": "Route not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return jsonify({"success": False, "message": "Method not allowed"}), 405

    return app
