from enum import Enum
from typing import Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field as PydField, field_validator

from app.db.models.orders import STATUS_VALUES


class OrderStatus(str, Enum):
    EXPEDIEE = STATUS_VALUES[0]
    LIVREE = STATUS_VALUES[1]


# ---------- IN ----------

class OrderCreateIn(BaseModel):
    """
    Formulaire de commande tel qu'envoyé par l'UI.
    Tous les champs sont optionnels ici : les règles (champs requis,
    quantité > 0, prix finis et positifs) sont appliquées par le service
    pour renvoyer un message précis.
    """
    numero_commande: Optional[str] = PydField(None, examples=["CMD-001"])
    statut: Optional[str] = PydField(OrderStatus.EXPEDIEE.value, examples=["Expédiée"])
    quantite: Optional[int] = PydField(None, examples=[2])
    email_client: Optional[str] = PydField(None, examples=["client@example.com"])
    prix_achat: Optional[float] = PydField(None, examples=[100.0])
    prix_vente: Optional[float] = PydField(None, examples=[150.0])
    nom_produit: Optional[str] = PydField(None, examples=["Casque audio"])


class OrderStatusIn(BaseModel):
    status: Optional[str] = PydField(None, examples=["Livrée"])


# ---------- OUT ----------

class OrderOut(BaseModel):
    id: int
    numero_commande: str
    statut: str
    quantite: int
    email_client: str
    prix_achat: float
    prix_vente: float
    nom_produit: str
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # SQLite relit les dates sans fuseau ; elles sont écrites en UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class OrderStatsOut(BaseModel):
    order_count: int
    total_sales: float
    total_profit: float
    delivered_count: int


class IdOut(BaseModel):
    id: int


class SuccessOut(BaseModel):
    success: bool = True
