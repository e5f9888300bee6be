import logging

from flask import Flask
from flask_cors import CORS
from flask_jwt_extended import JWTManager

from splitledger.config import Config
from splitledger.core import LedgerServices
from splitledger.extensions import init_mongo
from splitledger.stores import (
    MemoryExpenseStore, MemoryUserStore, MongoExpenseStore, MongoUserStore
)

jwt = JWTManager()


def create_app(config_class=Config, user_store=None, expense_store=None):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(level=app.config["LOG_LEVEL"])

    # Disable strict slashes to prevent 308 redirects that break CORS preflight
    app.url_map.strict_slashes = False

    CORS(
        app,
        supports_credentials=True,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}}
    )
    jwt.init_app(app)

    if user_store is None or expense_store is None:
        if app.config.get("MONGO_URI"):
            db = init_mongo(app)
            user_store = user_store or MongoUserStore(db)
            expense_store = expense_store or MongoExpenseStore(db)
        else:
            app.logger.warning("MONGO_URI not set, using in-memory stores")
            user_store = user_store or MemoryUserStore()
            expense_store = expense_store or MemoryExpenseStore()

    app.extensions["splitledger"] = LedgerServices.build(
        user_store,
        expense_store,
        email_domain=app.config["SHADOW_EMAIL_DOMAIN"],
        shadow_password=app.config["SHADOW_PASSWORD"],
    )

    from splitledger.auth.routes import users_bp
    from splitledger.expenses.routes import expenses_bp

    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(expenses_bp, url_prefix='/api/expenses')

    return app


def get_services(app) -> LedgerServices:
    return app.extensions["splitledger"]
