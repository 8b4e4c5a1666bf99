"""
➡️ But : Table des clients.

Un client n'est qu'une identité email. Le nombre de commandes n'est pas stocké :
il est recalculé à la lecture (jointure sur orders.email_client).
"""

from sqlmodel import Field

from .base import BaseModelDB

class Customer(BaseModelDB, table=True):
    __tablename__ = "customers"

    email: str = Field(index=True, unique=True, nullable=False, description="Email du client")
