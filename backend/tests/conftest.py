import os

import pytest
from fastapi.testclient import TestClient

from household_budget.config import AppConfig, DatabaseConfig
from household_budget.database import Database
from household_budget.main import create_app
from household_budget.services import (
    CategoryService,
    EntryService,
    MonthService,
    SummaryService,
    TransactionService,
)

from .fakes import (
    FakeBudgetEntryRepository,
    FakeCategoryRepository,
    FakeMonthRepository,
    FakeStore,
    FakeTransactionRepository,
)

MEMORY_URL = "sqlite:///:memory:"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep APP__* variables from the host out of every test."""
    for key in list(os.environ):
        if key.startswith("APP__"):
            monkeypatch.delenv(key)


# --- Fakes ---

@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def category_repo(store):
    return FakeCategoryRepository(store)


@pytest.fixture
def month_repo(store):
    return FakeMonthRepository(store)


@pytest.fixture
def entry_repo(store):
    return FakeBudgetEntryRepository(store)


@pytest.fixture
def transaction_repo(store):
    return FakeTransactionRepository(store)


@pytest.fixture
def category_service(category_repo):
    return CategoryService(category_repo)


@pytest.fixture
def month_service(month_repo, entry_repo):
    return MonthService(month_repo, entry_repo)


@pytest.fixture
def entry_service(entry_repo, category_repo, month_repo):
    return EntryService(entry_repo, category_repo, month_repo)


@pytest.fixture
def transaction_service(transaction_repo, entry_repo):
    return TransactionService(transaction_repo, entry_repo)


@pytest.fixture
def summary_service(entry_repo, transaction_repo, month_repo):
    return SummaryService(entry_repo, transaction_repo, month_repo)


# --- SQLite ---

@pytest.fixture
def database():
    database = Database(MEMORY_URL)
    database.create_schema()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session_factory()
    yield session
    session.rollback()
    session.close()


# --- HTTP ---

@pytest.fixture
def client():
    config = AppConfig(database=DatabaseConfig(url=MEMORY_URL))
    app = create_app(config)
    with TestClient(app) as client:
        yield client
