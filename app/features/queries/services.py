from typing import List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError

from app.core.logging import get_logger
from app.db.models.orders import Order, STATUS_VALUES
from app.db.repositories.customers import CustomerRepository
from app.db.repositories.orders import OrderRepository, SORTABLE_FIELDS
from app.features.customers.schemas import CustomerOut
from app.features.errors import StorageError, ValidationError
from app.utils import exports

logger = get_logger(__name__)


class QueryService:
    """
    Lectures seules : liste des commandes (plus récentes d'abord),
    liste des clients avec leur nombre de commandes, statistiques.
    """

    def __init__(self, customer_repo: CustomerRepository, order_repo: OrderRepository):
        self.customers = customer_repo
        self.orders = order_repo

    def list_orders(
        self,
        *,
        q: Optional[str] = None,
        statut: Optional[str] = None,
        email_client: Optional[str] = None,
        sort: Optional[str] = None,
        direction: str = "desc",
    ) -> Sequence[Order]:
        if statut and statut not in STATUS_VALUES:
            raise ValidationError("Statut invalide.")
        if sort and sort not in SORTABLE_FIELDS:
            raise ValidationError("Colonne de tri inconnue.")
        if direction not in ("asc", "desc"):
            raise ValidationError("Le sens du tri doit être 'asc' ou 'desc'.")

        try:
            return self.orders.list_filtered(
                q=q,
                statut=statut,
                email_client=email_client,
                sort=sort,
                descending=(direction == "desc"),
            )
        except SQLAlchemyError as e:
            logger.storage_failure("list_orders", e)
            raise StorageError("Erreur lors de la récupération des commandes.") from e

    def list_customers(self, *, q: Optional[str] = None) -> List[CustomerOut]:
        try:
            return self.customers.list_with_order_counts(q=q)
        except SQLAlchemyError as e:
            logger.storage_failure("list_customers", e)
            raise StorageError("Erreur lors de la récupération des clients.") from e

    def order_stats(self) -> dict:
        try:
            return self.orders.stats()
        except SQLAlchemyError as e:
            logger.storage_failure("order_stats", e)
            raise StorageError("Erreur lors du calcul des statistiques.") from e

    def export_orders(self, fmt: str, *, currency: str = "DH", **filters) -> Tuple[bytes, str, str]:
        """
        Exporte les commandes filtrées (mêmes filtres que list_orders).
        Retourne (contenu, media_type, filename).
        """
        if fmt not in exports.EXPORT_FORMATS:
            raise ValidationError("Format d'export inconnu (csv, xlsx ou pdf).")
        orders = self.list_orders(**filters)
        return exports.render(fmt, orders, currency=currency)
