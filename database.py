import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.server_api import ServerApi
from config import MONGO_URI, MONGO_DB

logger = logging.getLogger(__name__)

client = MongoClient(MONGO_URI, server_api=ServerApi('1'))

db = client[MONGO_DB]

application_collection = db["applications"]


def get_application_collection() -> Collection:
    return application_collection


def init_indexes(collection: Collection):
    """Unique email index backs the one-application-per-email rule."""
    collection.create_index([("email", ASCENDING)], unique=True, name="email_unique")
    collection.create_index([("created_at", DESCENDING)], name="created_at_desc")
    logger.info("Indexes ensured on %s", collection.name)
