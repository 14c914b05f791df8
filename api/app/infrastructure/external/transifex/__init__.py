"""
Content source remoto: API de Transifex.

Se usa tanto desde el webhook (request/response) como desde los scripts de
backfill/export.
"""
