"""
➡️ But : Encapsuler toutes les opérations de base de données sur la table customers.

CustomerRepository : CRUD générique + requêtes spécifiques (recherche par email,
liste avec le nombre de commandes calculé).

Ne contient aucune logique métier, juste de la persistance.

🔹 Avantages :

Réutilisable (les services n’ont pas à savoir comment la DB fonctionne).

Testable indépendamment.
"""

from typing import List, Optional
from sqlmodel import select, func

from app.db.repositories.base import BaseRepository
from app.db.models.customers import Customer
from app.db.models.orders import Order
from app.features.customers.schemas import CustomerOut


class CustomerRepository(BaseRepository[Customer]):
    """CRUD Customers + requêtes spécifiques."""
    model = Customer

    # ---------- GETTERS SPÉCIFIQUES ----------

    def get_by_email(self, email: str) -> Optional[Customer]:
        """Retourne un client par son email, ou None."""
        return self.session.exec(
            select(self.model).where(self.model.email == email)
        ).first()

    def email_taken_by_other(self, email: str, customer_id: int) -> bool:
        """True si l'email appartient déjà à un AUTRE client."""
        stmt = select(func.count(self.model.id)).where(
            self.model.email == email, self.model.id != customer_id
        )
        return self.session.exec(stmt).one() > 0

    # ---------- UPSERT ----------

    def get_or_create(self, email: str) -> Customer:
        """Retourne le client de cet email, le crée s'il n'existe pas."""
        customer = self.get_by_email(email)
        if customer:
            return customer
        return self.create(email=email)

    # ---------- LISTES ----------

    def list_with_order_counts(self, *, q: Optional[str] = None) -> List[CustomerOut]:
        """
        Clients + nombre de commandes (jointure externe sur l'email), triés par email.
        - q : recherche insensible à la casse dans l'email
        """
        stmt = (
            select(
                Customer.id,
                Customer.email,
                func.count(Order.id).label("order_count"),
            )
            .select_from(Customer)
            .join(Order, Order.email_client == Customer.email, isouter=True)
            .group_by(Customer.id, Customer.email)
            .order_by(Customer.email.asc())
        )
        if q:
            stmt = stmt.where(Customer.email.icontains(q, autoescape=True))

        rows = self.session.exec(stmt).all()
        return [CustomerOut(**dict(r._mapping)) for r in rows]
