import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values

from dsutil.app.core.config import settings
from dsutil.app.core.errors import DescriptorNotReadable, InvalidConnectionType
from dsutil.app.models.datasource import (
    CONNECTION_TYPES,
    ConnectionType,
    DataSourceDescriptor,
    parse_autocommit,
    parse_port,
    validate_type,
)

logger = logging.getLogger(__name__)

DB_CONNECT_TYPE = "db.connect.type"
DB_CONNECT_DRIVER = "db.connect.driver"
DB_CONNECT_NAME = "db.connect.name"
DB_CONNECT_USER = "db.connect.user"
DB_CONNECT_PASSWORD = "db.connect.password"
DB_CONNECT_HOST = "db.connect.host"
DB_CONNECT_PORT = "db.connect.port"
DB_CONNECT_DATABASE = "db.connect.database"
DB_CONNECT_ENCODING = "db.connect.encoding"
DB_CONNECT_OPTIONS = "db.connect.options"
DB_CONNECT_AUTOCOMMIT = "db.connect.autocommit"


def from_properties(properties: Mapping[str, Optional[str]]) -> DataSourceDescriptor:
    """
    Build a descriptor from ``db.connect.*`` properties.

    A missing or empty ``db.connect.type`` falls back to ``dedicated``, any
    other value has to be one of the known connection types.
    """
    type = properties.get(DB_CONNECT_TYPE)
    if type:
        if not validate_type(type):
            raise InvalidConnectionType(type, CONNECTION_TYPES)
    else:
        type = ConnectionType.DEDICATED.value

    descriptor = DataSourceDescriptor(
        type,
        properties.get(DB_CONNECT_NAME),
        properties.get(DB_CONNECT_HOST),
        parse_port(properties.get(DB_CONNECT_PORT)),
        properties.get(DB_CONNECT_DATABASE),
        properties.get(DB_CONNECT_DRIVER),
        properties.get(DB_CONNECT_USER),
        properties.get(DB_CONNECT_PASSWORD),
        properties.get(DB_CONNECT_ENCODING) or settings.DEFAULT_ENCODING,
        properties.get(DB_CONNECT_OPTIONS) or "",
        parse_autocommit(properties.get(DB_CONNECT_AUTOCOMMIT)),
    )
    logger.debug(f"Created {descriptor.type} data source {descriptor.name}: {descriptor.masked_connection_string()}")
    return descriptor


def load_properties(path: Union[str, Path]) -> Dict[str, str]:
    path = Path(path)
    if not path.is_file():
        raise DescriptorNotReadable(path)
    try:
        values = dotenv_values(path, interpolate=False, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DescriptorNotReadable(path, str(e)) from e
    # Keys without '=' come back as None
    return {key: value for key, value in values.items() if value is not None}


def create_from_file(path: Union[str, Path, None] = None) -> DataSourceDescriptor:
    path = path or settings.DATASOURCE_PROPERTIES
    logger.info(f"Loading data source properties from {path}")
    return from_properties(load_properties(path))
