"""
Извлечение текста из документов (.txt, .docx, .doc)

Dispatch is by file extension only. Plain text is decoded as UTF-8 with a
single Windows-1251 retry, .docx packages are reduced to the character data
of their main document part, and legacy .doc files go through a crude byte
filter whose output is noisy and only good enough for keyword counting.
"""

import logging
import os
import re
import zipfile
import zlib
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Union

from docx.opc.exceptions import PackageNotFoundError
from docx.opc.packuri import PackURI
from docx.opc.phys_pkg import PhysPkgReader

__all__ = ['extract', 'FormatError', 'FormatErrorKind', 'SUPPORTED_EXTENSIONS', 'get_extension']

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ('txt', 'docx', 'doc')
MAIN_DOCUMENT_URI = PackURI('/word/document.xml')
LEGACY_TEXT_ENCODING = 'windows-1251'

_TAG = re.compile(r"<[^>]+>")
_XML_ENTITIES = (
    ('&amp;', '&'),
    ('&lt;', '<'),
    ('&gt;', '>'),
    ('&quot;', '"'),
    ('&apos;', "'"),
)

PathLike = Union[str, os.PathLike]


class FormatErrorKind(Enum):
    UNSUPPORTED_TYPE = "unsupported_type"
    INVALID_CONTAINER = "invalid_container"
    IO_FAILURE = "io_failure"


class FormatError(Exception):
    """Extraction failure; the underlying exception is chained as __cause__"""

    def __init__(self, kind: FormatErrorKind, path: PathLike, message: str):
        super().__init__(message)
        self.kind = kind
        self.path = str(path)
        self.message = message

    def __str__(self):
        return f"{self.message} ({self.path})"


def get_extension(file_name: str) -> str:
    """Text after the last '.', lower-cased; '' when there is no dot"""
    _, dot, extension = file_name.rpartition('.')
    return extension.lower() if dot else ''


def read_txt(path: Path) -> str:
    """Decode as UTF-8, retrying once as Windows-1251 on invalid byte sequences"""
    data = path.read_bytes()
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError:
        logger.warning(f"{path.name}: not valid UTF-8, retrying as {LEGACY_TEXT_ENCODING}")
    return data.decode(LEGACY_TEXT_ENCODING)


def strip_markup(xml: str) -> str:
    """Replace every tag with a space, then unescape the five XML entities"""
    text = _TAG.sub(' ', xml)
    for entity, char in _XML_ENTITIES:
        text = text.replace(entity, char)
    return text


def read_docx(path: Path) -> str:
    if not path.is_file():
        raise FileNotFoundError(f"No such file: '{path}'")

    try:
        reader = PhysPkgReader(str(path))
    except PackageNotFoundError as e:
        raise FormatError(FormatErrorKind.INVALID_CONTAINER, path,
                          "File is not a Word XML package") from e

    try:
        blob = reader.blob_for(MAIN_DOCUMENT_URI)
    except KeyError as e:
        raise FormatError(FormatErrorKind.INVALID_CONTAINER, path,
                          f"Invalid docx file: missing {MAIN_DOCUMENT_URI.membername}") from e
    except (RuntimeError, NotImplementedError, EOFError) as e:
        # encrypted member, unknown compression method, truncated data
        raise FormatError(FormatErrorKind.INVALID_CONTAINER, path,
                          f"Cannot read {MAIN_DOCUMENT_URI.membername}: {e}") from e
    finally:
        reader.close()

    # malformed sequences become U+FFFD
    return strip_markup(blob.decode('utf-8', errors='replace'))


def _is_legacy_kept(ch: str) -> bool:
    # U+0085 and U+00A0 are not whitespace for this filter
    return ch.isalpha() or ch.isdecimal() or (ch.isspace() and ch not in '\x85\xa0')


_LEGACY_FILTER = {
    code: ' ' for code in range(256) if not _is_legacy_kept(chr(code))
}


def read_doc(path: Path) -> str:
    """
    Best-effort .doc reader: every byte is read as a Latin-1 character and
    kept only if it is a letter, digit or whitespace; anything else becomes
    a space. The binary container is not parsed.
    """
    logger.warning(f"{path.name}: legacy .doc, using byte filter (noisy output)")
    return path.read_bytes().decode('latin-1').translate(_LEGACY_FILTER)


_READERS: Dict[str, Callable[[Path], str]] = {
    'txt': read_txt,
    'docx': read_docx,
    'doc': read_doc,
}


def extract(file_path: PathLike) -> str:
    """Извлечь текст из файла; при ошибке выбрасывает FormatError"""
    if file_path is None:
        raise ValueError("File path must not be None")

    path = Path(file_path)
    extension = get_extension(path.name)
    reader = _READERS.get(extension)
    if reader is None:
        raise FormatError(FormatErrorKind.UNSUPPORTED_TYPE, path,
                          f"Unsupported file type: {extension or '<none>'}")

    logger.debug(f"Extracting {path} as {extension}")
    try:
        return reader(path)
    except FormatError:
        raise
    except (zipfile.BadZipFile, zlib.error) as e:
        raise FormatError(FormatErrorKind.INVALID_CONTAINER, path,
                          f"Corrupt archive: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise FormatError(FormatErrorKind.IO_FAILURE, path,
                          f"Failed to read file: {e}") from e
