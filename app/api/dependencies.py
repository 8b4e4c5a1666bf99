"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_consistency_service() : crée un ConsistencyService à partir de la session de la requête.

get_query_service() : crée un QueryService (lectures seules).

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()).
"""

from fastapi import Depends, Request
from sqlmodel import Session

from app.core.config import Settings
from app.db.session import get_session
from app.db.unit_of_work import UnitOfWork

from app.db.repositories.customers import CustomerRepository
from app.db.repositories.orders import OrderRepository

from app.features.consistency.services import ConsistencyService
from app.features.queries.services import QueryService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# -----------------------------
# Repositories
# -----------------------------
def get_customer_repository(session: Session = Depends(get_session)) -> CustomerRepository:
    return CustomerRepository(session)

def get_order_repository(session: Session = Depends(get_session)) -> OrderRepository:
    return OrderRepository(session)

def get_unit_of_work(session: Session = Depends(get_session)) -> UnitOfWork:
    return UnitOfWork(session)


# -----------------------------
# Services
# -----------------------------
def get_consistency_service(uow: UnitOfWork = Depends(get_unit_of_work)) -> ConsistencyService:
    return ConsistencyService(uow)

def get_query_service(
    customer_repo: CustomerRepository = Depends(get_customer_repository),
    order_repo: OrderRepository = Depends(get_order_repository),
) -> QueryService:
    return QueryService(customer_repo=customer_repo, order_repo=order_repo)
