"""One-off migration script: JSON data file -> SQL table (ids preserved)."""
from __future__ import annotations

import argparse
from pathlib import Path

from conceptos.core.config import get_settings
from conceptos.repositories.json_storage import load
from conceptos.repositories.sql_repository import SQLConceptRepository


def migrate(data_file: Path, database_url: str) -> int:
    if not data_file.exists():
        raise SystemExit(f"Archivo no encontrado: {data_file}")
    repo = SQLConceptRepository(database_url)
    repo.init()
    try:
        return repo.import_concepts(load(data_file))
    finally:
        repo.close()


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Migrar conceptos del archivo JSON a la base SQL")
    ap.add_argument("--data-file", default=str(settings.data_file), help="Archivo JSON de origen")
    ap.add_argument("--database-url", default=settings.database_url, help="URL SQLAlchemy de destino")
    args = ap.parse_args()

    total = migrate(Path(args.data_file), args.database_url)
    print(f"{total} conceptos migrados a {args.database_url}")


if __name__ == "__main__":
    main()
