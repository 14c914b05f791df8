"""
CLI: Transifex -> base de datos (backfill de traducciones).

Descarga todos los locales configurados para una tabla y los aplica con el
mismo writer que usa el webhook. Útil al dar de alta una tabla nueva o tras
perder notificaciones.

Variables de entorno:
  - TXDB_CONFIG_PATH (archivo YAML del catálogo, por defecto txdb.yml)

Ejecución:
  python scripts/backfill_translations.py --database shop --table widget_translations
  python scripts/backfill_translations.py --database shop --table widget_translations --locale es --locale fr
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger
from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
# La carpeta "api" contiene el paquete raíz `app/`.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

# Cargar variables desde .env si existe (api/.env o raíz del repo).
load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_API_ROOT.parent / ".env", override=False)

from app.application.use_cases.backfill_use_cases import BackfillUseCases
from app.core.config import settings
from app.infrastructure.catalog.database_catalog import DatabaseCatalog, load_catalog_config


def main() -> int:
    parser = argparse.ArgumentParser(description="Backfill de traducciones desde Transifex")
    parser.add_argument("--database", required=True, help="Nombre del database en el catálogo")
    parser.add_argument("--table", required=True, help="Tabla de traducciones")
    parser.add_argument(
        "--locale",
        action="append",
        dest="locales",
        help="Locale a aplicar (repetible). Por defecto, los del catálogo.",
    )
    parser.add_argument("--config", default=None, help="Ruta del catálogo (override de TXDB_CONFIG_PATH)")
    args = parser.parse_args()

    config = load_catalog_config(args.config or settings.TXDB_CONFIG_PATH, required=True)
    catalog = DatabaseCatalog.from_config(config)
    try:
        result = BackfillUseCases(catalog).backfill_table(args.database, args.table, args.locales)
    finally:
        catalog.close()

    for item in result.locales:
        logger.info(f"{item.locale}: {item.inserted} insert(s), {item.updated} update(s)")
    for locale, error in result.errors.items():
        logger.error(f"{locale}: {error}")

    return 1 if result.errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
