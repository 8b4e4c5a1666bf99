# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db.repositories.customers import CustomerRepository
from app.db.repositories.orders import OrderRepository
from app.db.session import Store
from app.db.unit_of_work import UnitOfWork
from app.features.consistency.services import ConsistencyService
from app.features.orders.schemas import OrderCreateIn
from app.features.queries.services import QueryService
from app.main import create_app


def make_order(**overrides) -> OrderCreateIn:
    data = {
        "numero_commande": "CMD-001",
        "statut": "Expédiée",
        "quantite": 1,
        "email_client": "amina@example.com",
        "prix_achat": 100.0,
        "prix_vente": 150.0,
        "nom_produit": "Casque audio",
    }
    data.update(overrides)
    return OrderCreateIn(**data)


@pytest.fixture
def store():
    store = Store("sqlite://")
    store.init_db()
    yield store
    store.dispose()


@pytest.fixture
def session(store):
    with store.session() as session:
        yield session


@pytest.fixture
def uow(session):
    return UnitOfWork(session)


@pytest.fixture
def consistency(uow):
    return ConsistencyService(uow)


@pytest.fixture
def queries(session):
    return QueryService(CustomerRepository(session), OrderRepository(session))


@pytest.fixture
def client(store):
    settings = Settings(ENV="test", DATABASE_URL="sqlite://", LOG_LEVEL="WARNING")
    app = create_app(settings, store=store)
    with TestClient(app) as c:
        yield c
