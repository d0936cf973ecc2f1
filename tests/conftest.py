"""
Shared fixtures.

The service is exercised through FastAPI's TestClient with the MongoDB
collection swapped for an in-memory one. Uploads go to a throwaway
directory that is set in the environment before the app is imported.
"""

import os
import shutil
import tempfile
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError
from pymongo.results import InsertOneResult

UPLOAD_DIR = tempfile.mkdtemp(prefix="resume-uploads-")
os.environ["UPLOAD_DIR"] = UPLOAD_DIR
os.environ.pop("SENDGRID_API_KEY", None)

from fastapi.testclient import TestClient  # noqa: E402

from database import get_application_collection  # noqa: E402
from main import app  # noqa: E402


class _Cursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, key, direction=1):
        self._docs.sort(key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def __iter__(self):
        return iter(self._docs)


class InMemoryCollection:
    """Just enough of pymongo's Collection, including the unique email index."""

    name = "applications"

    def __init__(self):
        self.docs = []

    def insert_one(self, document):
        if any(doc["email"] == document["email"] for doc in self.docs):
            raise DuplicateKeyError(
                "E11000 duplicate key error collection: applications index: email_unique",
                code=11000,
            )
        doc = dict(document)
        doc["_id"] = ObjectId()
        self.docs.append(doc)
        return InsertOneResult(doc["_id"], True)

    def find(self, filter=None):
        return _Cursor([dict(doc) for doc in self.docs])

    def create_index(self, keys, **kwargs):
        return kwargs.get("name", "index")


@pytest.fixture
def collection():
    return InMemoryCollection()


@pytest.fixture
def ack_mock(monkeypatch):
    mock = MagicMock(return_value=True)
    monkeypatch.setattr("routes.application_routes.send_application_ack", mock)
    return mock


@pytest.fixture
def client(collection, ack_mock):
    app.dependency_overrides[get_application_collection] = lambda: collection
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clean_upload_dir():
    yield
    for entry in os.listdir(UPLOAD_DIR):
        path = os.path.join(UPLOAD_DIR, entry)
        if os.path.isdir(path):
            shutil.rmtree(path)
        else:
            os.remove(path)


@pytest.fixture
def upload_dir():
    return UPLOAD_DIR


@pytest.fixture
def valid_fields():
    return {
        "name": "Jane Doe",
        "contactNumber": "+919876543210",
        "email": "jane.doe@example.com",
        "applicationType": "Job",
        "jobTitle": "Backend Engineer",
        "interestedAreas": "APIs, databases",
    }


@pytest.fixture
def pdf_file():
    return ("jane_doe_cv.pdf", b"%PDF-1.4\n% test resume\n", "application/pdf")
