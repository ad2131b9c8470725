"""Helpers turning call parameters into query strings, form data and URL suffixes."""

from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from ..models.request import ContentType


def remove_slashes(value: str) -> str:
    """Strip leading and trailing slashes from a path segment."""
    return value.strip("/")


def is_primitive(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_param(value: Any) -> str:
    """Render a scalar the way it goes on the wire in queries and forms."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _param_pairs(body: Union[Mapping[str, Any], Sequence[Any]]) -> List[Tuple[Any, Any]]:
    if isinstance(body, Mapping):
        return list(body.items())
    if isinstance(body, (list, tuple)):
        return list(enumerate(body))
    raise TypeError(
        f"Query parameters must be a mapping, list or tuple, got {type(body).__name__}"
    )


def body_to_params(body: Union[Mapping[str, Any], Sequence[Any]]) -> str:
    """Build a query string from a mapping.

    Scalars come first, then non-empty sequences as repeated ``key=value``
    pairs. ``None``, empty strings and empty sequences are dropped. Key order
    is preserved. A top-level list or tuple is keyed by position.

    Examples:
        >>> body_to_params({"a": 1, "b": "", "c": None, "d": [], "e": [1, 2]})
        'a=1&e=1&e=2'
        >>> body_to_params(["x", "y"])
        '0=x&1=y'

    Raises:
        TypeError: When ``body`` is neither a mapping nor a list or tuple.
    """
    pairs = _param_pairs(body)
    scalars = [
        f"{key}={format_param(value)}"
        for key, value in pairs
        if value is not None and value != "" and not isinstance(value, (list, tuple))
    ]
    arrays = [
        f"{key}={format_param(item)}"
        for key, value in pairs
        if isinstance(value, (list, tuple))
        for item in value
    ]
    return "&".join(scalars + arrays)
def get_url_end(
    value: Union[str, int, float, None] = None,
    entity_id: Union[str, int, None] = None,
) -> str:
    """Produce a URL suffix from a path value and an optional entity id.

    Examples:
        >>> get_url_end("x/y/")
        '/x/y'
        >>> get_url_end(5, 9)
        '/5/9'
        >>> get_url_end(None)
        ''
    """
    result = ""
    if isinstance(value, str) and value:
        result = f"/{remove_slashes(value)}"
    elif _is_number(value):
        result = f"/{value}"
    if entity_id:
        result += f"/{entity_id}"
    return result


def is_content_type_form_data(content_type: Optional[Union[ContentType, str]]) -> bool:
    return content_type in (ContentType.FORM_DATA, ContentType.FORM_ENCODED)


class FormData:
    """Ordered multi-value collection of form fields.

    Values are kept as given; files may be passed as bytes, file objects or
    ``(filename, content[, content_type])`` tuples the way httpx accepts them.
    """

    def __init__(self, entries: Optional[Mapping[str, Any]] = None) -> None:
        self._entries: List[Tuple[str, Any]] = []
        if entries:
            for key, value in entries.items():
                self.append(key, value)

    def append(self, key: str, value: Any) -> None:
        self._entries.append((key, value))

    def get_all(self, key: str) -> List[Any]:
        return [value for name, value in self._entries if name == key]

    def keys(self) -> List[str]:
        return [name for name, _ in self._entries]

    def items(self) -> List[Tuple[str, Any]]:
        return list(self._entries)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormData):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"FormData({self._entries!r})"


def convert_to_form_data(body: Mapping[str, Any]) -> FormData:
    return FormData(body)


def is_object_not_form_data(body: Any) -> bool:
    return isinstance(body, Mapping) and not isinstance(body, FormData)


def check_for_form_data(body: Any) -> Any:
    if is_object_not_form_data(body):
        return convert_to_form_data(body)
    return body
