from dotenv import load_dotenv
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

load_dotenv(".env")

import argparse

from perks.application import configure_logging
from perks.core.context import AppContext
from perks.core.settings import Settings
from perks.services.seeding import DEMO_PASSWORD, DEMO_USERS, seed_database


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo users and the partner deal catalog.")
    parser.add_argument("--no-reset", action="store_true", help="keep existing rows instead of wiping the tables")
    args = parser.parse_args()

    settings = Settings()
    configure_logging(settings)
    ctx = AppContext(settings)
    ctx.startup()
    db = ctx.session_factory()
    try:
        counts = seed_database(db, ctx.passwords, reset=not args.no_reset)
    finally:
        db.close()
        ctx.close()

    print(f"Seeded {counts['deals']} deals ({counts['public']} public, {counts['locked']} locked)")
    for u in DEMO_USERS:
        print(f"  {u['email']} / {DEMO_PASSWORD} (verified={u['is_verified']})")


if __name__ == "__main__":
    main()
