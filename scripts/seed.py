from assetdesk.core.config import settings
from assetdesk.db.session import engine, init_db
from assetdesk.db.seed import seed_all

from sqlmodel import Session


def run_seed():
    init_db()
    with Session(engine) as session:
        seed_all(session=session, seed_path=settings.SEED_PATH)


if __name__ == "__main__":
    run_seed()
