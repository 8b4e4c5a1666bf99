"""
➡️ But : Socle commun des repositories customers / orders.

Les écritures ne valident jamais elles-mêmes : elles ajoutent l'entité à la session
puis font un flush (ID disponible, contraintes vérifiées). Le commit ou le rollback
appartient à l'UnitOfWork qui englobe l'opération.
"""

from typing import Any, Generic, Optional, Type, TypeVar
from sqlmodel import SQLModel, Session

# Type générique pour le modèle (Customer, Order)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    def create(self, **fields) -> ModelT:
        entity = self.model(**fields)
        self.session.add(entity)
        self.session.flush()
        return entity

    def update(self, entity: ModelT, **changes) -> ModelT:
        for key, value in changes.items():
            setattr(entity, key, value)
        self.session.add(entity)
        self.session.flush()
        return entity

    def delete(self, entity: ModelT) -> None:
        self.session.delete(entity)
        self.session.flush()
