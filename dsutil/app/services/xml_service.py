import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Iterator, Union

from dsutil.app.core.config import settings
from dsutil.app.core.errors import DataSourceNotFound, DescriptorNotReadable, InvalidConnectionType, InvalidPort
from dsutil.app.models.datasource import (
    CONNECTION_TYPES,
    DataSourceDescriptor,
    parse_autocommit,
    parse_port,
    validate_type,
)

logger = logging.getLogger(__name__)


def _text(element: ET.Element, tag: str) -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def _port(value: str):
    try:
        return parse_port(value)
    except InvalidPort:
        # A non-numeric port counts as no port
        logger.warning(f"Ignoring non-numeric port {value!r}")
        return None


def from_element(element: ET.Element) -> DataSourceDescriptor:
    """
    Build a descriptor from a single ``<datasource>`` element.

    The connection type is taken as is; unknown values only produce a warning.
    """
    type = _text(element, "type")
    if not validate_type(type):
        logger.warning(f"Data source {_text(element, 'name')!r} uses unknown connection type {type!r}")

    return DataSourceDescriptor(
        type,
        _text(element, "name"),
        _text(element, "host"),
        _port(_text(element, "port")),
        _text(element, "database"),
        _text(element, "driver"),
        _text(element, "user"),
        _text(element, "password"),
        _text(element, "encoding") or settings.DEFAULT_ENCODING,
        _text(element, "options"),
        parse_autocommit(_text(element, "autocommit")),
    )


def read_descriptor(descriptor: Union[str, Path]) -> ET.Element:
    try:
        tree = ET.parse(descriptor)
    except (OSError, ET.ParseError) as e:
        raise DescriptorNotReadable(descriptor, str(e)) from e
    return tree.getroot()


def iter_datasources(root: ET.Element) -> Iterator[ET.Element]:
    # Every <datasource> directly below a <datasources> element, at any depth
    for parent in root.iter("datasources"):
        yield from parent.findall("datasource")


def create_by_name(name: str, descriptor: Union[str, Path, None] = None) -> DataSourceDescriptor:
    descriptor = descriptor or settings.DATASOURCE_DESCRIPTOR
    root = read_descriptor(descriptor)
    for element in iter_datasources(root):
        if _text(element, "name") == name:
            datasource = from_element(element)
            logger.debug(f"Found data source {name} in {descriptor}: {datasource.masked_connection_string()}")
            return datasource
    raise DataSourceNotFound(name, descriptor)


def create_by_type(type: str, descriptor: Union[str, Path, None] = None) -> Dict[str, DataSourceDescriptor]:
    if not validate_type(type):
        raise InvalidConnectionType(type, CONNECTION_TYPES)

    descriptor = descriptor or settings.DATASOURCE_DESCRIPTOR
    root = read_descriptor(descriptor)

    datasources = {}
    for element in iter_datasources(root):
        if _text(element, "type") == type:
            datasource = from_element(element)
            datasources[datasource.name] = datasource

    logger.debug(f"Loaded {len(datasources)} {type} data sources from {descriptor}")
    return datasources
