"""
Data format converter for JSON, YAML and XML.

Every conversion parses the input into a format-agnostic tree (see tree.py)
and serializes that tree into the target format.

XML notes:
- Parsing drops the document element's own name; its content is the tree.
  Serializing always wraps the tree in a <root> element, so no top-level key
  is lost in an XML round trip.
- Attributes are kept under an '@attributes' key when parsing XML, but are
  never written back as attributes: serializing renders that key as a plain
  (sanitized) '_attributes' element.
- A tag that appears once becomes a single value, a tag that repeats becomes
  a sequence.
"""

import json
import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict

import xmltodict
import yaml

from .exceptions import ConversionError, ParseError, ValidationError
from .tree import Mapping, Node, Null, Scalar, Sequence, add_child, from_python, to_python

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ('json', 'yaml', 'xml')
ATTRIBUTES_KEY = '@attributes'
DEFAULT_ROOT = 'root'
SEQUENCE_TAG = 'item'
NESTING_ERROR = 'Document is nested too deeply'


# Create a custom YAML loader that doesn't auto-convert dates to date objects
class StringLoader(yaml.SafeLoader):
    """Custom YAML loader that treats dates as strings."""
    pass

# Remove the implicit timestamp resolver so dates stay as strings
StringLoader.yaml_implicit_resolvers = {
    key: [resolver for resolver in resolvers if resolver[0] != 'tag:yaml.org,2002:timestamp']
    for key, resolvers in StringLoader.yaml_implicit_resolvers.items()
}


def normalize_format(format_name: Any) -> str:
    """Return the canonical format name or raise ValidationError."""
    if isinstance(format_name, str):
        normalized = format_name.strip().lower()
        if normalized in SUPPORTED_FORMATS:
            return normalized
    raise ValidationError(f"Invalid format: {format_name!r}. Supported: {list(SUPPORTED_FORMATS)}")


def sanitize_tag_name(name: str) -> str:
    """Sanitize string to be a valid XML tag name."""
    # Replace invalid characters with underscores
    sanitized = ''.join(c if c.isalnum() or c in '-_.' else '_' for c in name)

    # Ensure it starts with a letter or underscore
    if not sanitized or not (sanitized[0].isalpha() or sanitized[0] == '_'):
        sanitized = 'tag_' + sanitized

    return sanitized


def _local_name(name: str) -> str:
    # ElementTree spells namespaced names as '{uri}local'
    return name.rsplit('}', 1)[-1]


def _reject_constant(name: str) -> None:
    # json.loads accepts NaN and Infinity, which are not part of JSON
    raise ValueError(f"{name} is not a valid JSON value")


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class FormatConverter:
    """Parses and serializes JSON, YAML and XML through a shared tree."""

    def __init__(self):
        self.yaml_loader = StringLoader
        self.yaml_dumper = yaml.SafeDumper

    # Parsing

    def parse(self, text: str, format_name: str) -> Node:
        """
        Parse a document into a tree.

        Raises:
            ValidationError: If the format is not supported or text is not a string
            ParseError: If the document is malformed
        """
        format_name = normalize_format(format_name)
        if not isinstance(text, str):
            raise ValidationError(f"Input must be a string, got {type(text).__name__}")

        if format_name == 'json':
            return self._parse_json(text)
        if format_name == 'yaml':
            return self._parse_yaml(text)
        return self._parse_xml(text)

    def _parse_json(self, text: str) -> Node:
        try:
            data = json.loads(text, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            raise ParseError('json', e.msg, e.lineno, e.colno)
        except ValueError as e:
            raise ParseError('json', str(e))
        except RecursionError:
            raise ParseError('json', NESTING_ERROR)
        return self._build_tree('json', data)

    def _parse_yaml(self, text: str) -> Node:
        try:
            data = yaml.load(text, Loader=self.yaml_loader)
        except yaml.YAMLError as e:
            mark = getattr(e, 'problem_mark', None)
            message = getattr(e, 'problem', None) or str(e)
            if mark is not None:
                raise ParseError('yaml', message, mark.line + 1, mark.column + 1)
            raise ParseError('yaml', message)
        except ValueError as e:
            raise ParseError('yaml', str(e))
        except RecursionError:
            raise ParseError('yaml', NESTING_ERROR)
        return self._build_tree('yaml', data)

    def _build_tree(self, format_name: str, data: Any) -> Node:
        try:
            return from_python(data)
        except (TypeError, ValueError) as e:
            raise ParseError(format_name, str(e))
        except RecursionError:
            raise ParseError(format_name, NESTING_ERROR)

    def _parse_xml(self, text: str) -> Node:
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            line, column = getattr(e, 'position', (None, None))
            raise ParseError('xml', str(e), line, column)
        try:
            return self._element_to_node(root)
        except RecursionError:
            raise ParseError('xml', NESTING_ERROR)

    def _element_to_node(self, element: ET.Element) -> Node:
        """
        Map one element onto the tree.

        Non-blank text wins over everything else: an element that carries
        text is a Scalar even when it also has attributes or children.
        """
        if element.text and element.text.strip():
            return Scalar(element.text.strip())

        node = Mapping()
        if element.attrib:
            node.entries[ATTRIBUTES_KEY] = Mapping({
                _local_name(name): Scalar(value) for name, value in element.attrib.items()
            })

        for child in element:
            add_child(node, _local_name(child.tag), self._element_to_node(child))
            if child.tail and child.tail.strip():
                return Scalar(child.tail.strip())

        return node

    # Serialization

    def serialize(self, node: Node, format_name: str) -> str:
        """
        Serialize a tree into the given format.

        Raises:
            ValidationError: If the format is not supported, the tree holds a
                non-finite number (JSON only) or is nested too deeply
        """
        format_name = normalize_format(format_name)

        try:
            if format_name == 'json':
                return json.dumps(to_python(node), indent=2, ensure_ascii=False, allow_nan=False)
            if format_name == 'yaml':
                return yaml.dump(
                    to_python(node),
                    Dumper=self.yaml_dumper,
                    default_flow_style=False,
                    allow_unicode=True,
                    sort_keys=False,
                    indent=2
                )
            return self._serialize_xml(node)
        except RecursionError:
            raise ValidationError(NESTING_ERROR)
        except ValueError as e:
            raise ValidationError(f"Cannot serialize to {format_name}: {e}")

    def _serialize_xml(self, node: Node) -> str:
        # parsing drops the document element name, so always wrap in the fixed root
        document = {DEFAULT_ROOT: self._xml_content(node)}
        return xmltodict.unparse(document, pretty=True, indent='  ')

    def _xml_content(self, node: Node) -> Any:
        """Translate a node into the dict layout xmltodict.unparse expects."""
        if isinstance(node, Null):
            return None
        if isinstance(node, Scalar):
            return _scalar_text(node.value)
        if isinstance(node, Sequence):
            if not node.items:
                return None
            return {SEQUENCE_TAG: [self._xml_content(item) for item in node.items]}

        children: Dict[str, Any] = {}
        for key, value in node.entries.items():
            tag = sanitize_tag_name(key)
            rendered = self._xml_content(value)
            if tag not in children:
                children[tag] = rendered
            elif isinstance(children[tag], list):
                children[tag].append(rendered)
            else:
                # two keys sanitized to the same tag
                children[tag] = [children[tag], rendered]
        return children

    # Conversion helpers

    def convert(self, text: str, input_format: str, output_format: str) -> str:
        """Convert a document between formats (same format prettifies)."""
        tree = self.parse(text, input_format)
        return self.serialize(tree, output_format)

    def detect_format(self, data: str) -> str:
        """Detect the format of input data."""
        data = data.strip()
        if not data:
            return 'unknown'

        # Check for JSON first (most strict)
        try:
            self._parse_json(data)
            return 'json'
        except ParseError:
            pass

        # Check for XML
        try:
            self._parse_xml(data)
            return 'xml'
        except ParseError:
            pass

        # Check for YAML (most permissive, so check last)
        try:
            self._parse_yaml(data)
            # Additional check to avoid false positives
            if ':' in data or '-' in data:
                return 'yaml'
        except ParseError:
            pass

        return 'unknown'


# Global converter instance
converter = FormatConverter()


def parse(text: str, format_name: str) -> Node:
    """Parse text in format_name ('json', 'yaml' or 'xml') into a tree."""
    return converter.parse(text, format_name)


def serialize(node: Node, format_name: str) -> str:
    """Serialize a tree into format_name ('json', 'yaml' or 'xml')."""
    return converter.serialize(node, format_name)


def convert(text: str, input_format: str, output_format: str) -> str:
    return converter.convert(text, input_format, output_format)


def detect_format(data: str) -> str:
    return converter.detect_format(data)


def convert_format(input_data: str, input_format: str, output_format: str) -> Dict[str, Any]:
    """
    Convert data between formats.

    Args:
        input_data: The input data string
        input_format: Source format ('json', 'yaml', 'xml', 'auto')
        output_format: Target format ('json', 'yaml', 'xml')

    Returns:
        Dict with 'success', 'result', and optional 'error' keys
    """
    try:
        # Auto-detect input format if needed
        if isinstance(input_format, str) and input_format.strip().lower() == 'auto':
            input_format = converter.detect_format(input_data)
            if input_format == 'unknown':
                return {
                    'success': False,
                    'error': 'Could not auto-detect input format',
                    'error_type': 'ValidationError'
                }

        input_format = normalize_format(input_format)
        output_format = normalize_format(output_format)
        result = converter.convert(input_data, input_format, output_format)

        return {
            'success': True,
            'result': result,
            'input_format': input_format,
            'output_format': output_format,
            'operation': 'format' if input_format == output_format else 'convert'
        }

    except ParseError as e:
        logger.debug("Conversion failed: %s", e)
        return {
            'success': False,
            'error': str(e),
            'error_type': type(e).__name__,
            'details': e.to_dict()
        }
    except ConversionError as e:
        return {
            'success': False,
            'error': str(e),
            'error_type': type(e).__name__
        }


def validate_format(data: str, format_type: str) -> Dict[str, Any]:
    """
    Validate that data is in the specified format.

    Args:
        data: The data string to validate
        format_type: Expected format ('json', 'yaml', 'xml')

    Returns:
        Dict with 'valid', 'error' (if not valid), and optional metadata
    """
    try:
        format_type = normalize_format(format_type)
    except ValidationError:
        return {'valid': False, 'error': f'Unsupported format: {format_type}'}

    try:
        converter.parse(data, format_type)
        return {'valid': True, 'format': format_type}
    except ParseError as e:
        result: Dict[str, Any] = {
            'valid': False,
            'error': str(e),
            'format': format_type
        }
        if e.line is not None:
            result['line'] = e.line
            result['column'] = e.column
        return result
    except ValidationError as e:
        return {
            'valid': False,
            'error': f'Validation error: {str(e)}',
            'format': format_type
        }
