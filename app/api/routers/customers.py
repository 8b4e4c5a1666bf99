"""
➡️ But : Définir les endpoints clients.

Réceptionne les requêtes HTTP, appelle le service correspondant, traduit les erreurs métier
en HTTPException. Les routes ne contiennent ni SQL ni logique métier.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from app.api.dependencies import get_consistency_service, get_query_service
from app.features.consistency.services import ConsistencyService
from app.features.customers.schemas import CustomerEmailIn, CustomerOut
from app.features.errors import (
    CustomerHasOrders,
    CustomerNotFound,
    DuplicateEmail,
    StorageError,
    ValidationError,
)
from app.features.orders.schemas import IdOut, SuccessOut
from app.features.queries.services import QueryService

router = APIRouter(
    prefix="/customers",
    tags=["customers"],
    responses={404: {"description": "Not Found"}},
)


@router.get(
    "",
    summary="Lister les clients",
    description="Clients triés par email, avec le nombre de commandes de chacun.",
    response_model=List[CustomerOut],
)
def list_customers(
    q: Optional[str] = Query(None, description="Recherche dans l'email"),
    svc: QueryService = Depends(get_query_service),
):
    try:
        return svc.list_customers(q=q)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


@router.post(
    "",
    summary="Créer un client",
    response_model=IdOut,
    responses={400: {"description": "Email manquant ou déjà utilisé"}},
)
def create_customer(
    payload: CustomerEmailIn,
    svc: ConsistencyService = Depends(get_consistency_service),
):
    try:
        customer = svc.create_customer(payload.email)
    except (ValidationError, DuplicateEmail) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return IdOut(id=customer.id)


@router.put(
    "/{customer_id}",
    summary="Modifier l'email d'un client",
    description="L'email de toutes ses commandes est mis à jour dans la même transaction.",
    response_model=SuccessOut,
    responses={400: {"description": "Email manquant ou déjà utilisé"}},
)
def rename_customer(
    payload: CustomerEmailIn,
    customer_id: int = Path(...),
    svc: ConsistencyService = Depends(get_consistency_service),
):
    try:
        svc.rename_customer(customer_id, payload.email)
    except CustomerNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except (ValidationError, DuplicateEmail) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return SuccessOut()


@router.delete(
    "/{customer_id}",
    summary="Supprimer un client",
    description="Refusé tant qu'au moins une commande référence son email.",
    response_model=SuccessOut,
    responses={400: {"description": "Le client a des commandes"}},
)
def delete_customer(
    customer_id: int = Path(...),
    svc: ConsistencyService = Depends(get_consistency_service),
):
    try:
        svc.delete_customer(customer_id)
    except CustomerNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except CustomerHasOrders as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return SuccessOut()
