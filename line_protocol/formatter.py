"""Line protocol rendering"""
from typing import Iterable, Mapping, Optional, Tuple

from .models import FieldType, FieldValue, field_type_of

# Characters that split a line into name, tag set and field set
_NAME_ESCAPES = str.maketrans({",": "\\,", " ": "\\ "})
_KEY_ESCAPES = str.maketrans({",": "\\,", "=": "\\=", " ": "\\ "})
_STRING_ESCAPES = str.maketrans({'"': '\\"', "\\": "\\\\"})


class LineFormatter:
    """Formats a metric as a single line.

    The default mode writes keys and values exactly as given: nothing is
    escaped or quoted, so callers must keep commas, equals signs and spaces
    out of names, keys and values. ``strict`` mode applies the escaping,
    string quoting and integer suffix of the full line protocol instead.
    """

    def __init__(self, sort_keys: bool = True, omit_empty_tag_separator: bool = False, strict: bool = False):
        self.sort_keys = sort_keys
        self.omit_empty_tag_separator = omit_empty_tag_separator
        self.strict = strict

    @classmethod
    def from_config(cls, config) -> "LineFormatter":
        """Build a formatter from a Config instance"""
        return cls(
            sort_keys=config.sort_keys,
            omit_empty_tag_separator=config.omit_empty_tag_separator,
            strict=config.strict_line_protocol,
        )

    def render_value(self, value: FieldValue) -> str:
        """Render a single field value"""
        field_type = field_type_of(value)
        if field_type is FieldType.BOOLEAN:
            return "true" if value else "false"
        if field_type is FieldType.INTEGER:
            return f"{value}i" if self.strict else str(value)
        if field_type is FieldType.FLOAT:
            return repr(value)
        if self.strict:
            return '"' + value.translate(_STRING_ESCAPES) + '"'
        return value

    def format_line(
        self,
        name: str,
        tags: Mapping[str, str],
        values: Mapping[str, FieldValue],
        timestamp: Optional[int] = None,
    ) -> str:
        """Assemble name, tag set, field set and optional timestamp into one line"""
        tag_line = ",".join(
            f"{self._key(k)}={self._key(v)}" for k, v in self._ordered(tags.items())
        )
        value_line = ",".join(
            f"{self._key(k)}={self.render_value(v)}" for k, v in self._ordered(values.items())
        )

        head = self._name(name)
        # an empty tag set never keeps its comma in strict mode
        if tag_line or not (self.omit_empty_tag_separator or self.strict):
            head = f"{head},{tag_line}"

        line = f"{head} {value_line}"
        if timestamp is not None:
            line = f"{line} {timestamp}"
        return line

    def _ordered(self, items: Iterable[Tuple[str, object]]):
        if self.sort_keys:
            return sorted(items, key=lambda item: item[0])
        return list(items)

    def _name(self, name: str) -> str:
        return name.translate(_NAME_ESCAPES) if self.strict else name

    def _key(self, key: str) -> str:
        return key.translate(_KEY_ESCAPES) if self.strict else key
