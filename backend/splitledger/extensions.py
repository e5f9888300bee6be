from pymongo import MongoClient

_client = None


def init_mongo(app):
    global _client
    _client = MongoClient(app.config["MONGO_URI"])

    # get_default_database() extracts DB name from URI (e.g., /splitledger)
    db = _client.get_default_database(default="splitledger")
    app.logger.info("Connected to MongoDB database %s", db.name)
    return db
