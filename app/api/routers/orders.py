from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status

from app.api.dependencies import get_consistency_service, get_query_service, get_settings
from app.core.config import Settings
from app.features.consistency.services import ConsistencyService
from app.features.errors import InvalidStatus, StorageError, ValidationError
from app.features.orders.schemas import (
    IdOut,
    OrderCreateIn,
    OrderOut,
    OrderStatsOut,
    OrderStatusIn,
    SuccessOut,
)
from app.features.queries.services import QueryService

router = APIRouter(
    prefix="/orders",
    tags=["orders"],
)


def _list_filters(
    q: Optional[str] = Query(None, description="Recherche dans numéro / email / produit"),
    statut: Optional[str] = Query(None, description="Expédiée | Livrée"),
    email_client: Optional[str] = Query(None, description="Email exact du client"),
    sort: Optional[str] = Query(None, description="Colonne de tri (created_at par défaut)"),
    direction: str = Query("desc", description="asc | desc"),
) -> dict:
    return {
        "q": q,
        "statut": statut,
        "email_client": email_client,
        "sort": sort,
        "direction": direction,
    }


# -----------------------------
# Lectures
# -----------------------------
@router.get(
    "",
    summary="Lister les commandes",
    description="Plus récentes d'abord, sauf tri explicite.",
    response_model=List[OrderOut],
)
def list_orders(
    filters: dict = Depends(_list_filters),
    svc: QueryService = Depends(get_query_service),
):
    try:
        return svc.list_orders(**filters)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


@router.get(
    "/stats",
    summary="Statistiques du tableau de bord",
    response_model=OrderStatsOut,
)
def order_stats(svc: QueryService = Depends(get_query_service)):
    try:
        return svc.order_stats()
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


@router.get(
    "/export",
    summary="Exporter les commandes (csv, xlsx, pdf)",
    response_class=Response,
    responses={200: {"description": "Fichier à télécharger"}},
)
def export_orders(
    format: str = Query("csv", description="csv | xlsx | pdf"),
    filters: dict = Depends(_list_filters),
    svc: QueryService = Depends(get_query_service),
    settings: Settings = Depends(get_settings),
):
    try:
        content, media_type, filename = svc.export_orders(
            format, currency=settings.CURRENCY_SUFFIX, **filters
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# -----------------------------
# Écritures
# -----------------------------
@router.post(
    "",
    summary="Créer une commande",
    description="Crée aussi le client si son email est nouveau (même transaction).",
    response_model=IdOut,
    responses={400: {"description": "Champs manquants ou invalides"}},
)
def create_order(
    payload: OrderCreateIn,
    svc: ConsistencyService = Depends(get_consistency_service),
):
    try:
        order = svc.create_order(payload)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return IdOut(id=order.id)


@router.delete(
    "/{order_id}",
    summary="Supprimer une commande",
    response_model=SuccessOut,
)
def delete_order(
    order_id: int = Path(...),
    svc: ConsistencyService = Depends(get_consistency_service),
):
    try:
        svc.delete_order(order_id)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return SuccessOut()


@router.patch(
    "/{order_id}/status",
    summary="Changer le statut d'une commande",
    response_model=SuccessOut,
    responses={400: {"description": "Statut invalide"}},
)
def update_order_status(
    payload: OrderStatusIn,
    order_id: int = Path(...),
    svc: ConsistencyService = Depends(get_consistency_service),
):
    try:
        svc.update_order_status(order_id, payload.status)
    except InvalidStatus as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return SuccessOut()
