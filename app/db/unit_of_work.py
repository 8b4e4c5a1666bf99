"""
➡️ But : Regrouper plusieurs écritures dans UNE transaction.

UnitOfWork partage une session entre les repositories customers et orders :

    with uow:
        uow.orders.reassign_email(old, new)
        uow.customers.update(customer, email=new)

Sortie normale du bloc → commit. Exception dans le bloc (ou pendant le commit) → rollback,
puis l'exception est propagée. Aucun état intermédiaire n'est visible des autres lecteurs.
"""

from sqlmodel import Session

from app.db.repositories.customers import CustomerRepository
from app.db.repositories.orders import OrderRepository


class UnitOfWork:
    def __init__(self, session: Session):
        self.session = session
        self.customers = CustomerRepository(session)
        self.orders = OrderRepository(session)

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            self.session.rollback()
            return False
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return False
