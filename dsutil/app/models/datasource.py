from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.engine.url import URL

from dsutil.app.core.db import connection_url
from dsutil.app.core.errors import InvalidPort

MASKED_PASSWORD = "****"


class ConnectionType(str, Enum):
    SESSION = "session"
    MASTER = "master"
    SLAVE = "slave"
    DEDICATED = "dedicated"


CONNECTION_TYPES = tuple(t.value for t in ConnectionType)

# Accepted autocommit tokens, anything else is False
BOOLEAN_TOKENS = {
    "true": True,
    "false": False,
    "1": True,
    "0": False,
    "on": True,
    "off": False,
}


def parse_autocommit(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return BOOLEAN_TOKENS.get(str(value).strip(), False)


def parse_port(value: Any) -> Optional[int]:
    if value is None or isinstance(value, int):
        return value
    value = str(value).strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise InvalidPort(value) from None


def validate_type(type: Any) -> bool:
    """Return True if ``type`` is one of the four known connection types."""
    return type in CONNECTION_TYPES


class DataSourceDescriptor(BaseModel):
    """
    Connection parameters of a single data source.

    Instances are frozen; build them with the constructor or one of the
    factories in ``dsutil.app.services``. The constructor keeps ``type`` as
    given, validation of the connection type is left to the factories.
    """

    model_config = ConfigDict(frozen=True)

    type: Optional[str] = None  # session, master, slave, dedicated
    name: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    driver: Optional[str] = None  # mysqli, pgsql, etc.
    user: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
    encoding: str = "utf8"
    options: str = ""  # query string appended after '?'
    autocommit: bool = False

    def __init__(
        self,
        type: Optional[str] = None,
        name: Optional[str] = None,
        host: Optional[str] = None,
        port: Any = None,
        database: Optional[str] = None,
        driver: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        encoding: Optional[str] = "utf8",
        options: Optional[str] = "",
        autocommit: bool = False,
    ):
        super().__init__(
            type=type,
            name=name,
            host=host,
            port=port,
            database=database,
            driver=driver,
            user=user,
            password=password,
            encoding=encoding,
            options=options,
            autocommit=autocommit,
        )

    @field_validator("port", mode="before")
    @classmethod
    def _numeric_port(cls, value):
        return parse_port(value)

    @field_validator("encoding", mode="before")
    @classmethod
    def _default_encoding(cls, value):
        return value if value else "utf8"

    @field_validator("options", mode="before")
    @classmethod
    def _default_options(cls, value):
        return value if value else ""

    validate_type = staticmethod(validate_type)

    def _render(self, password: Optional[str]) -> str:
        dsn = f"{self.driver or ''}://{self.user or ''}"
        if password:
            dsn += f":{password}"
        dsn += f"@{self.host or ''}"
        if self.port:
            dsn += f":{self.port}"
        dsn += f"/{self.database or ''}"
        if self.options:
            dsn += f"?{self.options}"
        return dsn

    def connection_string(self) -> str:
        return self._render(self.password)

    def masked_connection_string(self) -> str:
        """Connection string with the password replaced by ``****``, for logs."""
        return self._render(MASKED_PASSWORD if self.password else None)

    def to_url(self) -> URL:
        return connection_url(
            self.driver,
            self.user,
            self.password,
            self.host,
            self.port,
            self.database,
            self.options,
        )

    def __str__(self) -> str:
        return self.connection_string()
