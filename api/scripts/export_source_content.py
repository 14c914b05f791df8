"""
CLI: export del contenido fuente de una tabla de traducciones (YAML).

Recorre la tabla por lotes (AutoIncrementIterator) y emite el payload del
locale fuente con la misma forma que consume el webhook. Con --upload lo sube
como contenido fuente del resource en Transifex.

Ejecución:
  python scripts/export_source_content.py --database shop --table widget_translations
  python scripts/export_source_content.py --database shop --table widget_translations --output widgets.yml
  python scripts/export_source_content.py --database shop --table widget_translations --upload
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger
from dotenv import load_dotenv

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

load_dotenv(_API_ROOT / ".env", override=False)
load_dotenv(_API_ROOT.parent / ".env", override=False)

from app.application.use_cases.backfill_use_cases import BackfillUseCases
from app.core.config import settings
from app.infrastructure.catalog.database_catalog import DatabaseCatalog, load_catalog_config


def main() -> int:
    parser = argparse.ArgumentParser(description="Export del contenido fuente de una tabla")
    parser.add_argument("--database", required=True, help="Nombre del database en el catálogo")
    parser.add_argument("--table", required=True, help="Tabla de traducciones")
    parser.add_argument("--locale", default=None, help="Locale a exportar (por defecto el fuente)")
    parser.add_argument("--batch-size", type=int, default=None, help="Tamaño de lote del iterador")
    parser.add_argument("--output", default=None, help="Archivo destino (por defecto stdout)")
    parser.add_argument("--upload", action="store_true", help="Subir el contenido a Transifex")
    parser.add_argument("--config", default=None, help="Ruta del catálogo (override de TXDB_CONFIG_PATH)")
    args = parser.parse_args()

    config = load_catalog_config(args.config or settings.TXDB_CONFIG_PATH, required=True)
    catalog = DatabaseCatalog.from_config(config)
    try:
        content = BackfillUseCases(catalog).export_source(
            args.database,
            args.table,
            locale=args.locale,
            upload=args.upload,
            batch_size=args.batch_size,
        )
    finally:
        catalog.close()

    if args.output:
        Path(args.output).write_text(content, encoding="utf-8")
        logger.info(f"Contenido exportado a {args.output}")
    else:
        print(content)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
