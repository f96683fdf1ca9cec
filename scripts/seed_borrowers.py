"""Seed dev borrowers from scripts/seed-borrowers.json through the data API.

Creates every borrower in the file for the given owner (a user id from the
auth provider), stamping user_id and registrationdate like the API does.
A borrower whose email the owner already has is skipped.

Usage:
    python -m scripts.seed_borrowers <owner_user_id> [path/to/seed-borrowers.json]

Requires: SUPABASE_URL, SUPABASE_KEY, SUPABASE_JWT_SECRET (env or .env).
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from lendcrm.application.services.borrower_service import BorrowerService
from lendcrm.core.config import get_settings
from lendcrm.infrastructure.persistence.repositories import (
    BorrowerRepository,
    RecordStoreConfig,
)
from lendcrm.infrastructure.postgrest import create_postgrest_client
from lendcrm.schemas.borrower import BorrowerCreate


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees SUPABASE_* when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


async def run(owner_id: str, path: Path) -> None:
    if not path.exists():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    rows = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(rows, list):
        print("Seed file must contain a JSON array of borrowers", file=sys.stderr)
        sys.exit(1)

    _load_env()
    get_settings.cache_clear()
    settings = get_settings()
    client = create_postgrest_client(settings)
    repo = BorrowerRepository(
        client, RecordStoreConfig.from_settings(settings.borrowers_table, settings)
    )
    service = BorrowerService(repo)
    try:
        for raw in rows:
            data = BorrowerCreate.model_validate(raw)
            if await service.find_by_email(owner_id, data.email) is not None:
                print(f"  Borrower {data.email} already exists, skip")
                continue
            try:
                created = await service.create(owner_id, data)
                print(f"  Borrower {data.firstname} {data.lastname} -> {created.id}")
            except Exception as e:
                print(f"  Skip borrower {data.email}: {e}", file=sys.stderr)
    finally:
        await repo.aclose()
        await client.aclose()

    print("Seed completed.")


def main() -> None:
    if len(sys.argv) < 2:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    root = _project_root()
    owner_id = sys.argv[1]
    path_arg = sys.argv[2] if len(sys.argv) > 2 else None
    path = Path(path_arg) if path_arg else root / "scripts" / "seed-borrowers.json"
    if not path.is_absolute():
        path = (root / path).resolve()
    asyncio.run(run(owner_id, path))


if __name__ == "__main__":
    main()
