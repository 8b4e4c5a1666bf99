"""
➡️ But : Configurer la base SQLite et gérer les sessions de base de données.

Store : possède l'engine (une instance par application, créée dans create_app()).

Store.init_db() : crée les tables à partir des modèles SQLModel (sans jamais les supprimer).

get_session() : dépendance FastAPI qui ouvre une session sur le Store de l'application,
la fournit aux routes, puis la ferme proprement.

🔹 Avantages :

Un seul endroit pour gérer les connexions DB.

Pas d'état global : les tests construisent leur propre Store (SQLite en mémoire).
"""

from typing import Dict, Any, Optional
from fastapi import Request
from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

# Import all models for creating all tables
from app.db.models.customers import Customer
from app.db.models.orders import Order


def build_engine(url: str, *, echo: bool = False) -> Engine:
    assert url, "DATABASE_URL must be set"

    is_sqlite = url.startswith("sqlite:")
    in_memory = is_sqlite and (url in ("sqlite://", "sqlite:///:memory:"))

    connect_args: Dict[str, Any] = {}
    kwargs: Dict[str, Any] = {}
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False
    if in_memory:
        # une seule connexion partagée, sinon chaque connexion voit une base vide
        kwargs["poolclass"] = StaticPool

    return create_engine(
        url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,  # ping utile pour Postgres/MySQL ; inutile pour SQLite
        **kwargs,
    )


class Store:
    """Handle unique vers la base, possédé par l'application."""

    def __init__(self, url: str, *, echo: bool = False, engine: Optional[Engine] = None):
        self.url = url
        self.engine: Engine = engine or build_engine(url, echo=echo)

    def init_db(self) -> None:
        """
        Crée les tables si elles n'existent pas.
        Les données existantes sont conservées d'un démarrage à l'autre.
        """
        SQLModel.metadata.create_all(self.engine)

    def session(self) -> Session:
        return Session(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_session(request: Request):
    """
    Dépendance FastAPI : fournit une session par requête.
    Utilisation :
        def route(..., session: Session = Depends(get_session)):
            ...
    """
    with get_store(request).session() as session:
        yield session
