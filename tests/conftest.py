# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from product_api.main import create_app

API_KEY = "test-key"


@pytest.fixture
def app():
    # fresh store with the three seed products for every test
    return create_app(api_key=API_KEY)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth():
    return {"x-api-key": API_KEY}


@pytest.fixture
def new_product():
    return {
        "name": "Blender",
        "description": "600W blender with glass jar",
        "price": 89.99,
        "category": "kitchen",
        "inStock": True,
    }
