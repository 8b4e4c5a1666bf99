"""
➡️ But : Contenir les règles de cohérence entre orders et customers.

Les commandes pointent vers leur client par l'email (pas de clé étrangère). Ce service garantit :

- renommer un client renomme l'email de TOUTES ses commandes dans la même transaction ;

- un client référencé par au moins une commande ne peut pas être supprimé ;

- créer une commande crée le client s'il n'existe pas, dans la même transaction.

Lève des erreurs métier (app.features.errors), que les routes traduisent en HTTPException.
"""

import math
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.logging import get_logger
from app.db.models.customers import Customer
from app.db.models.orders import Order, STATUS_VALUES
from app.db.unit_of_work import UnitOfWork
from app.features.errors import (
    CustomerHasOrders,
    CustomerNotFound,
    DuplicateEmail,
    InvalidStatus,
    StorageError,
    ValidationError,
)
from app.features.orders.schemas import OrderCreateIn

logger = get_logger(__name__)

# plus grand entier stocké par une colonne INTEGER (64 bits)
MAX_QUANTITE = 2**63 - 1


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


class ConsistencyService:
    """
    Toutes les écritures passent par ici.
    Chaque opération = une UnitOfWork (commit si OK, rollback sinon).
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    # -----------------------------------
    # Helpers
    # -----------------------------------
    def _get_customer_or_404(self, customer_id: int) -> Customer:
        customer = self.uow.customers.get(customer_id)
        if not customer:
            raise CustomerNotFound()
        return customer

    @staticmethod
    def _require_email(email: Optional[str]) -> str:
        email = _clean(email)
        if not email:
            raise ValidationError("L'email est obligatoire.")
        return email

    @staticmethod
    def _validate_order(payload: OrderCreateIn) -> dict:
        """Retourne les champs nettoyés de la commande, ou lève ValidationError."""
        fields = {
            "numero_commande": _clean(payload.numero_commande),
            "email_client": _clean(payload.email_client),
            "nom_produit": _clean(payload.nom_produit),
        }
        if not all(fields.values()) or payload.quantite is None:
            raise ValidationError()

        if payload.quantite <= 0:
            raise ValidationError("La quantité doit être supérieure à 0.")
        if payload.quantite > MAX_QUANTITE:
            raise ValidationError("La quantité est trop grande.")

        for name in ("prix_achat", "prix_vente"):
            price = getattr(payload, name)
            if price is None:
                raise ValidationError()
            if not math.isfinite(price) or price < 0:
                raise ValidationError("Les prix doivent être des nombres positifs.")
            fields[name] = float(price)

        statut = payload.statut or STATUS_VALUES[0]
        if statut not in STATUS_VALUES:
            raise ValidationError("Statut invalide.")

        fields["statut"] = statut
        fields["quantite"] = payload.quantite
        return fields

    # -----------------------------------
    # Customers
    # -----------------------------------
    def create_customer(self, email: Optional[str]) -> Customer:
        email = self._require_email(email)
        try:
            with self.uow:
                if self.uow.customers.get_by_email(email):
                    raise DuplicateEmail()
                customer = self.uow.customers.create(email=email)
        except DuplicateEmail as e:
            logger.mutation_rejected("create_customer", e, email=email)
            raise
        except IntegrityError as e:
            logger.mutation_rejected("create_customer", e, email=email)
            raise DuplicateEmail() from e
        except SQLAlchemyError as e:
            logger.storage_failure("create_customer", e, email=email)
            raise StorageError() from e

        logger.mutation_ok("customer_created", customer_id=customer.id, email=email)
        return customer

    def rename_customer(self, customer_id: int, new_email: Optional[str]) -> Customer:
        """
        Renomme un client ET toutes ses commandes, atomiquement.
        Si new_email appartient déjà à un autre client : DuplicateEmail, rien ne change.
        """
        new_email = self._require_email(new_email)
        try:
            with self.uow:
                customer = self._get_customer_or_404(customer_id)
                old_email = customer.email
                if old_email == new_email:
                    return customer
                if self.uow.customers.email_taken_by_other(new_email, customer_id):
                    raise DuplicateEmail()

                moved = self.uow.orders.reassign_email(old_email, new_email)
                self.uow.customers.update(customer, email=new_email)
        except (CustomerNotFound, DuplicateEmail) as e:
            logger.mutation_rejected("rename_customer", e, customer_id=customer_id, email=new_email)
            raise
        except IntegrityError as e:
            logger.mutation_rejected("rename_customer", e, customer_id=customer_id, email=new_email)
            raise DuplicateEmail() from e
        except SQLAlchemyError as e:
            logger.storage_failure("rename_customer", e, customer_id=customer_id)
            raise StorageError("Erreur lors de la mise à jour.") from e

        logger.mutation_ok(
            "customer_renamed",
            customer_id=customer_id,
            email=new_email,
            old_email=old_email,
            orders_moved=moved,
        )
        return customer

    def delete_customer(self, customer_id: int) -> None:
        """Supprime un client, sauf s'il reste des commandes à son email."""
        try:
            with self.uow:
                customer = self._get_customer_or_404(customer_id)
                if self.uow.orders.count_by_email(customer.email) > 0:
                    raise CustomerHasOrders()
                self.uow.customers.delete(customer)
        except (CustomerNotFound, CustomerHasOrders) as e:
            logger.mutation_rejected("delete_customer", e, customer_id=customer_id)
            raise
        except SQLAlchemyError as e:
            logger.storage_failure("delete_customer", e, customer_id=customer_id)
            raise StorageError() from e

        logger.mutation_ok("customer_deleted", customer_id=customer_id)

    # -----------------------------------
    # Orders
    # -----------------------------------
    def create_order(self, payload: OrderCreateIn) -> Order:
        """Valide, upsert du client puis insertion de la commande (une seule transaction)."""
        try:
            fields = self._validate_order(payload)
        except ValidationError as e:
            logger.mutation_rejected("create_order", e, email=payload.email_client)
            raise

        try:
            with self.uow:
                self.uow.customers.get_or_create(fields["email_client"])
                order = self.uow.orders.create(**fields)
        except SQLAlchemyError as e:
            logger.storage_failure("create_order", e, email=fields["email_client"])
            raise StorageError(
                "Erreur lors de la création de la commande en base de données."
            ) from e

        logger.mutation_ok(
            "order_created",
            order_id=order.id,
            email=order.email_client,
            numero_commande=order.numero_commande,
        )
        return order

    def delete_order(self, order_id: int) -> None:
        """Suppression sans condition ; un id absent n'est pas une erreur."""
        try:
            with self.uow:
                order = self.uow.orders.get(order_id)
                if order:
                    self.uow.orders.delete(order)
        except SQLAlchemyError as e:
            logger.storage_failure("delete_order", e, order_id=order_id)
            raise StorageError("Erreur lors de la suppression de la commande.") from e

        logger.mutation_ok("order_deleted", order_id=order_id, found=order is not None)

    def update_order_status(self, order_id: int, status: Optional[str]) -> None:
        if status not in STATUS_VALUES:
            e = InvalidStatus()
            logger.mutation_rejected("update_order_status", e, order_id=order_id, status=status)
            raise e

        try:
            with self.uow:
                order = self.uow.orders.get(order_id)
                if order:
                    self.uow.orders.update(order, statut=status)
        except SQLAlchemyError as e:
            logger.storage_failure("update_order_status", e, order_id=order_id)
            raise StorageError("Erreur lors de la mise à jour du statut.") from e

        logger.mutation_ok("order_status_updated", order_id=order_id, status=status, found=order is not None)
