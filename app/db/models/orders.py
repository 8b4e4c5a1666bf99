from datetime import datetime, timezone

from sqlalchemy import CheckConstraint
from sqlmodel import Field

from .base import BaseModelDB


STATUS_VALUES = ("Expédiée", "Livrée")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order(BaseModelDB, table=True):
    """
    Commande client.
    Le lien avec le client est l'email (dénormalisé, pas de clé étrangère).
    Seul `statut` change après la création.
    """
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint(
            "statut IN ({})".format(", ".join(f"'{s}'" for s in STATUS_VALUES)),
            name="ck_orders_statut",
        ),
        CheckConstraint("quantite > 0", name="ck_orders_quantite"),
        CheckConstraint("prix_achat >= 0", name="ck_orders_prix_achat"),
        CheckConstraint("prix_vente >= 0", name="ck_orders_prix_vente"),
    )

    numero_commande: str = Field(description="Numéro de commande")
    statut: str = Field(description="Expédiée | Livrée")
    quantite: int = Field(description="Quantité (> 0)")
    email_client: str = Field(index=True, description="Email du client (lien vers customers.email)")
    prix_achat: float = Field(description="Prix d'achat total")
    prix_vente: float = Field(description="Prix de vente total")
    nom_produit: str = Field(description="Nom du produit")

    created_at: datetime = Field(default_factory=_utcnow, index=True)
