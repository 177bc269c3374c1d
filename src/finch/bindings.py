"""Binding collections — the ordered ``(key, value)`` pairs a form reads.

Forms accept any of:

- an iterable of ``(key, value)`` string pairs (order and repeats kept)
- a ``Mapping[str, str]`` (a list/tuple value counts as repeated keys)
- a multi-value mapping with ``get_list`` (the ``FormData`` and
  ``QueryParams`` objects web frameworks hand out)

``as_bindings()`` flattens all of them into one list of pairs.

Request bodies can be turned into bindings directly:

- ``application/x-www-form-urlencoded`` (stdlib, no extra dependency)
- ``multipart/form-data`` (``python-multipart``)

File parts of a multipart body are not string values and are skipped.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Protocol, TypeAlias, runtime_checkable
from urllib.parse import parse_qsl

from finch.errors import UnsupportedContentType

logger = logging.getLogger("finch.bindings")

Binding: TypeAlias = tuple[str, str]


@runtime_checkable
class MultiValueMapping(Protocol):
    """A read-only string mapping where keys can have multiple values.

    ``get_list`` returns all values for a key, in submission order.
    """

    def __iter__(self) -> Iterator[str]: ...
    def get_list(self, key: str) -> list[str]: ...


BindingSource: TypeAlias = Iterable[Binding] | Mapping[str, Any] | MultiValueMapping


def as_bindings(source: BindingSource) -> list[Binding]:
    """Flatten *source* into an ordered list of ``(key, value)`` pairs.

    Raises:
        TypeError: If *source* is a plain string or yields a non-string key.
    """
    if isinstance(source, str | bytes):
        msg = f"Bindings must be pairs or a mapping, not {type(source).__name__}"
        raise TypeError(msg)

    pairs: list[Binding] = []
    if isinstance(source, MultiValueMapping):
        for key in source:
            pairs.extend((key, value) for value in source.get_list(key))
    elif isinstance(source, Mapping):
        for key, value in source.items():
            if isinstance(value, list | tuple):
                pairs.extend((key, v) for v in value)
            else:
                pairs.append((key, value))
    else:
        pairs.extend((key, value) for key, value in source)

    for key, _ in pairs:
        if not isinstance(key, str):
            msg = f"Binding keys must be strings, got {key!r}"
            raise TypeError(msg)
    return pairs


def parse_urlencoded(body: bytes | str, encoding: str = "utf-8") -> list[Binding]:
    """Parse a URL-encoded body or query string, keeping pair order.

    Undecodable bytes become U+FFFD, as in multipart bodies.
    """
    text = body.decode(encoding, errors="replace") if isinstance(body, bytes) else body
    return parse_qsl(text, keep_blank_values=True, encoding=encoding, errors="replace")


def parse_multipart(body: bytes, content_type: str) -> list[Binding]:
    """Parse a ``multipart/form-data`` body into string bindings.

    Raises:
        UnsupportedContentType: If *content_type* has no boundary.
    """
    from python_multipart.multipart import MultipartParser, parse_options_header

    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise UnsupportedContentType(msg)

    pairs: list[Binding] = []

    # Current part state
    header_field = bytearray()
    header_value = bytearray()
    part_data = bytearray()
    part_name: str | None = None
    part_filename: str | None = None

    def on_part_begin() -> None:
        nonlocal part_name, part_filename
        part_data.clear()
        part_name = None
        part_filename = None

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        part_data.extend(chunk[start:end])

    def on_part_end() -> None:
        if part_name is None:
            return
        if part_filename is not None:
            logger.debug("Skipping file part %r (%s)", part_name, part_filename)
            return
        pairs.append((part_name, part_data.decode("utf-8", errors="replace")))

    def on_header_field(chunk: bytes, start: int, end: int) -> None:
        header_field.extend(chunk[start:end])

    def on_header_value(chunk: bytes, start: int, end: int) -> None:
        header_value.extend(chunk[start:end])

    def on_header_end() -> None:
        nonlocal part_name, part_filename
        if bytes(header_field).lower() == b"content-disposition":
            _, params = parse_options_header(bytes(header_value))
            name = params.get(b"name")
            if name is not None:
                part_name = name.decode("utf-8")
            filename = params.get(b"filename")
            if filename is not None:
                part_filename = filename.decode("utf-8")
        header_field.clear()
        header_value.clear()

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
        "on_header_end": on_header_end,
    }

    parser = MultipartParser(boundary, callbacks)
    parser.write(body)
    parser.finalize()
    return pairs


def parse_form_body(body: bytes, content_type: str) -> list[Binding]:
    """Parse a form body by content type.

    Raises:
        UnsupportedContentType: If *content_type* is not a form encoding.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        return parse_urlencoded(body)

    if ct_lower == "multipart/form-data":
        return parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise UnsupportedContentType(msg)
