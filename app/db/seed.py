from pathlib import Path
from typing import Any, Dict

import yaml
from sqlmodel import Session

from app.core.logging import get_logger
from app.db.unit_of_work import UnitOfWork
from app.features.consistency.services import ConsistencyService
from app.features.errors import DuplicateEmail
from app.features.orders.schemas import OrderCreateIn

logger = get_logger(__name__)


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


# -----------------------------
# Seed
# -----------------------------
def seed_all(*, session: Session, seed_path: str | Path) -> Dict[str, int]:
    """
    Crée les clients puis les commandes du YAML via ConsistencyService,
    exactement comme l'API (upsert du client à la création d'une commande).
    Un client déjà présent, ou une commande dont le numéro existe déjà, est ignoré
    (le seed peut être relancé sans doublon). Retourne les compteurs créés.
    """
    data = load_seed_yaml(seed_path)
    uow = UnitOfWork(session)
    svc = ConsistencyService(uow)
    created = {"customers": 0, "orders": 0}

    for email in data.get("customers", []) or []:
        try:
            svc.create_customer(email)
            created["customers"] += 1
        except DuplicateEmail:
            logger.info("seed_customer_exists", email=email)

    for raw in data.get("orders", []) or []:
        if uow.orders.get_by_numero(str(raw.get("numero_commande", "")).strip()):
            logger.info("seed_order_exists", numero_commande=raw.get("numero_commande"))
            continue
        svc.create_order(OrderCreateIn(**raw))
        created["orders"] += 1

    logger.info("seed_done", **created)
    return created
