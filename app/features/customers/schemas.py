"""
➡️ But : Définir les formats d’entrée/sortie de l’API clients (couche validation).

CustomerEmailIn → corps de requête POST / PUT

CustomerOut → réponse de l’API (order_count calculé, jamais stocké)
"""

from pydantic import BaseModel, Field


class CustomerEmailIn(BaseModel):
    email: str = Field("", examples=["client@example.com"])


class CustomerOut(BaseModel):
    id: int
    email: str
    order_count: int = 0

    model_config = {"from_attributes": True}
