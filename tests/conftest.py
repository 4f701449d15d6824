"""Pytest configuration and shared fixtures."""

import os

# In-memory database for anything that reaches the default engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from recipefinder import models  # noqa: E402, F401
from recipefinder.database import Base, get_db  # noqa: E402
from recipefinder.main import app  # noqa: E402
from recipefinder.plan.kitchen import KitchenInventoryManager  # noqa: E402
from recipefinder.plan.shopping_list import ShoppingListManager  # noqa: E402
from recipefinder.routers.deps import get_kitchen_manager, get_shopping_list_manager  # noqa: E402
from recipefinder.schemas import Ingredient, Recipe  # noqa: E402
from recipefinder.storage import InMemoryStore, StorageError  # noqa: E402


# =============================================================================
# Recipe Fixtures
# =============================================================================


@pytest.fixture
def tomato_salad() -> Recipe:
    """Four-serving recipe with a mix of count, volume and weight units."""
    return Recipe(
        name="Tomato Salad",
        category="Salad",
        difficulty="Easy",
        prep_time="15 minutes",
        cooking_time="0 minutes",
        base_servings=4,
        ingredients=[
            Ingredient(base_quantity=6, unit="", name="tomatoes"),
            Ingredient(base_quantity=2, unit="tbsp", name="extra virgin olive oil"),
            Ingredient(base_quantity=1, unit="cup", name="milk"),
            Ingredient(base_quantity=200, unit="g", name="feta cheese"),
            Ingredient(base_quantity=1, unit="pinch", name="salt"),
        ],
        instructions=["Slice tomatoes", "Dress and serve"],
    )


@pytest.fixture
def recipe_payload() -> dict:
    """JSON body for a recipe, as a client would send it."""
    return {
        "name": "Pancakes",
        "prep_time": "10 minutes",
        "cooking_time": "20 minutes",
        "base_servings": 2,
        "ingredients": [
            {"base_quantity": 1.5, "unit": "cup", "name": "flour"},
            {"base_quantity": 2, "unit": "", "name": "eggs"},
            {"base_quantity": 250, "unit": "ml", "name": "milk"},
        ],
    }


# =============================================================================
# Manager Fixtures
# =============================================================================


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def shopping_list(store: InMemoryStore) -> ShoppingListManager:
    return ShoppingListManager(store)


@pytest.fixture
def kitchen(store: InMemoryStore) -> KitchenInventoryManager:
    return KitchenInventoryManager(store)


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def client(shopping_list: ShoppingListManager, kitchen: KitchenInventoryManager):
    """Test client wired to fresh in-memory managers."""
    app.dependency_overrides[get_shopping_list_manager] = lambda: shopping_list
    app.dependency_overrides[get_kitchen_manager] = lambda: kitchen
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def db_engine():
    """Fresh in-memory SQLite engine with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    with Session(db_engine) as session:
        yield session


@pytest.fixture
def sql_client(db_engine):
    """Test client whose managers read and write the test database."""
    session_factory = sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =============================================================================
# Failure Fixtures
# =============================================================================


class FlakyStore(InMemoryStore):
    """In-memory store whose writes fail while ``fail`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.fail = False

    def save(self, key, rows):
        if self.fail:
            raise StorageError(f"Failed to save {key}: disk full", key=key)
        super().save(key, rows)


@pytest.fixture
def flaky_store() -> FlakyStore:
    return FlakyStore()


@pytest.fixture
def flaky_client(flaky_store: FlakyStore):
    """Test client whose managers share a store that can be made to fail."""
    app.dependency_overrides[get_shopping_list_manager] = lambda: ShoppingListManager(flaky_store)
    app.dependency_overrides[get_kitchen_manager] = lambda: KitchenInventoryManager(flaky_store)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
