from typing import Optional
from urllib.parse import parse_qsl

from sqlalchemy.engine.url import URL

def connection_url(
    driver: Optional[str],
    user: Optional[str],
    password: Optional[str],
    host: Optional[str],
    port: Optional[int],
    database: Optional[str],
    options: str = "",
) -> URL:
    # Built from the separate fields; the rendered DSN is not escaped and
    # can't be parsed back when the password holds '@' or '/'.
    # Nothing connects here.
    return URL.create(
        drivername=driver or "",
        username=user or None,
        password=password or None,
        host=host or None,
        port=port or None,
        database=database or None,
        query=dict(parse_qsl(options, keep_blank_values=True)) if options else {},
    )
