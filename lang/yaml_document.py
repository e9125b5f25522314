"""Reading and writing of language documents.

A language document is a flat YAML mapping of string keys to string values.
PyYAML reads documents; ruamel.yaml writes them, because PyYAML does not
let values be quoted without also quoting keys. Values are written double
quoted so that strings such as "yes" or "1.0" read back as text.
"""

import io
import os
from typing import Mapping

import yaml
from ruamel.yaml import YAML as RuamelYAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.scalarstring import DoubleQuotedScalarString

from lang.store_errors import DocumentFormatError
from utils.logging_setup import get_logger

logger = get_logger("yaml_document")


def coerce_scalar(value) -> str:
    """Convert a loaded YAML scalar to the text shown to the user."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_document(content: str, path: str = None) -> dict[str, str]:
    """Parse document text into an ordered key to value mapping.

    Args:
        content: YAML text
        path: Source path, used in log and error messages only

    Returns:
        dict: Key to value mapping, empty for an empty document

    Raises:
        DocumentFormatError: If the text is not valid YAML
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise DocumentFormatError(f"Invalid YAML in language document: {e}", path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Language document {path} is not a mapping ({type(data).__name__}), treating it as empty")
        return {}

    return {coerce_scalar(k): coerce_scalar(v) for k, v in data.items()}


def load_document(path) -> dict[str, str]:
    """Load a language document. A missing file is an empty document."""
    if not os.path.isfile(path):
        return {}
    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()
    return parse_document(content, str(path))


def _create_yaml_writer() -> RuamelYAML:
    ryaml = RuamelYAML()
    ryaml.width = 1000  # Prevent line wrapping
    ryaml.indent(mapping=2, sequence=4, offset=2)
    ryaml.allow_unicode = True
    return ryaml


_resolver = yaml.resolver.Resolver()


def _resolves_as_text(value: str) -> bool:
    # ruamel.yaml writes YAML 1.2, where "yes" or "on" may stay plain, but
    # documents are read back with PyYAML's YAML 1.1 rules
    tag = _resolver.resolve(yaml.ScalarNode, value, (True, False))
    return tag == "tag:yaml.org,2002:str"


def dump_document(mapping: Mapping, quote_values: bool = True) -> str:
    """Serialize a key to value mapping as document text.

    An empty mapping produces an empty document. With quote_values off, only
    values that would otherwise read back as something other than text are
    quoted.
    """
    if not mapping:
        return ""

    data = CommentedMap()
    for key, value in mapping.items():
        value = "" if value is None else str(value)
        if quote_values or not _resolves_as_text(value):
            value = DoubleQuotedScalarString(value)
        key = str(key)
        if not _resolves_as_text(key):
            key = DoubleQuotedScalarString(key)
        data[key] = value

    stream = io.StringIO()
    _create_yaml_writer().dump(data, stream)
    return stream.getvalue()


def write_document(path, mapping: Mapping, quote_values: bool = True):
    """Overwrite a language document with the given mapping."""
    content = dump_document(mapping, quote_values)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
