from app.core.config import settings
from app.core.logging import setup_logging
from app.db.session import Store
from app.db.seed import seed_all


def run_seed():
    setup_logging(settings.LOG_LEVEL)
    store = Store(settings.DATABASE_URL, echo=False)
    store.init_db()
    with store.session() as session:
        seed_all(session=session, seed_path="app/db/seed_data.yaml")
    store.dispose()


if __name__ == "__main__":
    run_seed()
