# app/db/repositories/orders.py
from typing import Optional, Sequence
from sqlalchemy import case
from sqlmodel import select, or_, func

from app.db.repositories.base import BaseRepository
from app.db.models.orders import Order

# Colonnes autorisées pour le tri côté API
SORTABLE_FIELDS = (
    "numero_commande",
    "nom_produit",
    "email_client",
    "statut",
    "quantite",
    "prix_vente",
    "created_at",
)


class OrderRepository(BaseRepository[Order]):
    """CRUD Orders + requêtes spécifiques."""
    model = Order

    # ---------- LISTES / RECHERCHE ----------

    def list_filtered(
        self,
        *,
        q: Optional[str] = None,
        statut: Optional[str] = None,
        email_client: Optional[str] = None,
        sort: Optional[str] = None,
        descending: bool = True,
    ) -> Sequence[Order]:
        """
        Liste des commandes avec filtres optionnels.
        - q            : recherche insensible à la casse sur numéro / email / produit
        - statut       : statut exact
        - email_client : email exact
        - sort         : colonne de tri (SORTABLE_FIELDS), created_at par défaut
        L'id sert de départage pour un ordre stable.
        """
        stmt = select(self.model)

        if q:
            stmt = stmt.where(
                or_(
                    self.model.numero_commande.icontains(q, autoescape=True),
                    self.model.email_client.icontains(q, autoescape=True),
                    self.model.nom_produit.icontains(q, autoescape=True),
                )
            )
        if statut:
            stmt = stmt.where(self.model.statut == statut)
        if email_client:
            stmt = stmt.where(self.model.email_client == email_client)

        column = getattr(self.model, sort if sort in SORTABLE_FIELDS else "created_at")
        if descending:
            stmt = stmt.order_by(column.desc(), self.model.id.desc())
        else:
            stmt = stmt.order_by(column.asc(), self.model.id.asc())

        return self.session.exec(stmt).all()

    def get_by_numero(self, numero_commande: str) -> Optional[Order]:
        stmt = select(self.model).where(self.model.numero_commande == numero_commande)
        return self.session.exec(stmt).first()

    def list_by_email(self, email: str) -> Sequence[Order]:
        stmt = select(self.model).where(self.model.email_client == email)
        return self.session.exec(stmt).all()

    # ---------- COMPTEURS ----------

    def count_by_email(self, email: str) -> int:
        """Nombre de commandes rattachées à un email."""
        stmt = select(func.count(self.model.id)).where(self.model.email_client == email)
        return self.session.exec(stmt).one()

    def stats(self) -> dict:
        """Agrégats du tableau de bord : ventes, bénéfice, livrées."""
        stmt = select(
            func.count(self.model.id),
            func.coalesce(func.sum(self.model.prix_vente), 0.0),
            func.coalesce(func.sum(self.model.prix_vente - self.model.prix_achat), 0.0),
            func.coalesce(func.sum(case((self.model.statut == "Livrée", 1), else_=0)), 0),
        )
        order_count, total_sales, total_profit, delivered_count = self.session.exec(stmt).one()
        return {
            "order_count": order_count,
            "total_sales": float(total_sales),
            "total_profit": float(total_profit),
            "delivered_count": int(delivered_count),
        }

    # ---------- ÉCRITURES SPÉCIFIQUES ----------

    def reassign_email(self, old_email: str, new_email: str) -> int:
        """
        Rattache toutes les commandes de old_email à new_email.
        Retourne le nombre de commandes modifiées.
        """
        orders = self.list_by_email(old_email)
        for order in orders:
            order.email_client = new_email
            self.session.add(order)
        self.session.flush()
        return len(orders)
