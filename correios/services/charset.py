"""Charset selection for carrier XML responses.

CalcPrecoPrazo answers in ISO-8859-1 while declaring it inside the XML
prolog. The selector maps the declared name to either the identity
transform (UTF-8) or ``Latin1Reader``, which re-encodes the stream to
UTF-8 so the parser always sees valid UTF-8 bytes.

Unknown declarations are a hard failure; identity is never assumed.
"""

import io
import re
from typing import BinaryIO

from correios.errors.domain import UnsupportedCharsetError

# http://www.iana.org/assignments/character-sets (last updated 2010-11-04)
ISO_8859_1_NAMES = (
    "ISO_8859-1:1987",
    "ISO-8859-1",  # preferred MIME name
    "iso-ir-100",
    "ISO_8859-1",
    "latin1",
    "l1",
    "IBM819",
    "CP819",
    "csISOLatin1",
)

UTF_8_NAMES = (
    "UTF-8",
    "",  # no declaration
)

_XML_DECLARATION = re.compile(
    rb"""^\s*<\?xml[^>]*?\bencoding\s*=\s*["']([A-Za-z0-9._:\-]*)["']""",
)

_RUNE_SELF = 0x80


def _is_charset(charset: str, names: tuple[str, ...]) -> bool:
    """Case-insensitive membership test of ``charset`` in ``names``."""
    charset = charset.lower()
    return any(charset == name.lower() for name in names)


def is_charset_iso88591(charset: str) -> bool:
    """True when ``charset`` names ISO-8859-1 under any IANA alias."""
    return _is_charset(charset, ISO_8859_1_NAMES)


def is_charset_utf8(charset: str) -> bool:
    """True for UTF-8 or an empty (undeclared) charset."""
    return _is_charset(charset, UTF_8_NAMES)


def declared_encoding(body: bytes) -> str:
    """Return the ``encoding`` of the XML declaration, or "" if absent."""
    match = _XML_DECLARATION.match(body)
    if match is None:
        return ""
    return match.group(1).decode("ascii")


class Latin1Reader:
    """Single-step ISO-8859-1 to UTF-8 stream adapter.

    Consumes the source one byte at a time. Bytes below 0x80 pass through;
    higher bytes expand to their two-byte UTF-8 form, which is buffered
    and drained before the next source byte is read.

    Not a general-purpose stream: only ``read_byte()`` and ``read(1)`` are
    supported. Bulk reads raise ``io.UnsupportedOperation``.
    """

    def __init__(self, source: BinaryIO) -> None:
        self._source = source
        self._pending = bytearray()

    def read_byte(self) -> bytes:
        """Return the next UTF-8 byte, or b"" at end of input."""
        if not self._pending:
            b = self._source.read(1)
            if not b:
                return b""
            if b[0] < _RUNE_SELF:
                return b
            # ISO-8859-1 byte N is code point U+00NN
            self._pending.extend(chr(b[0]).encode("utf-8"))
        value = self._pending[:1]
        del self._pending[:1]
        return bytes(value)

    def read(self, size: int = -1) -> bytes:
        """Return one byte; any other ``size`` raises ``io.UnsupportedOperation``."""
        if size != 1:
            raise io.UnsupportedOperation("Latin1Reader supports only read(1); use read_byte()")
        return self.read_byte()


def charset_reader(charset: str, source: BinaryIO) -> BinaryIO | Latin1Reader:
    """Wrap ``source`` so it yields UTF-8 for the declared charset.

    Args:
        charset: Encoding name from the XML declaration (case-insensitive).
        source: Binary stream of the raw response body.

    Returns:
        ``source`` itself for UTF-8, a ``Latin1Reader`` for ISO-8859-1.

    Raises:
        UnsupportedCharsetError: For any other declaration.
    """
    if is_charset_utf8(charset):
        return source
    if is_charset_iso88591(charset):
        return Latin1Reader(source)
    raise UnsupportedCharsetError(charset)


def drain(reader: BinaryIO | Latin1Reader) -> bytes:
    """Consume a reader one byte at a time and return everything read."""
    return b"".join(iter(lambda: reader.read(1), b""))
