#!/usr/bin/env python3
"""
Registrar un concepto directamente en el backend configurado (STORAGE_BACKEND).

Uso:
  python scripts/add_concept.py --name Recursion [--description "Una funcion que se llama a si misma"]
"""
from __future__ import annotations

import argparse
import sys

from conceptos.core.config import get_settings
from conceptos.repositories import build_repository
from conceptos.services.concept_service import ConceptService


def main() -> None:
    ap = argparse.ArgumentParser(description="Registrar concepto")
    ap.add_argument("--name", required=True, help="Nombre del concepto")
    ap.add_argument("--description", default="", help="Descripcion (opcional)")
    args = ap.parse_args()

    repo = build_repository(get_settings())
    repo.init()
    try:
        result = ConceptService(repo).create({"name": args.name, "description": args.description})
    finally:
        repo.close()
    if not result.is_success:
        raise SystemExit(result.error.message)
    concept = result.value
    print("OK: concepto registrado")
    print(f"  ID: {concept.id}")
    print(f"  Nombre: {concept.name}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
