"""
Content encoding for blob creation.

Turns FileDescriptors into base64 payloads. Inline content is used as-is
(text is encoded as UTF-8); otherwise the file is read from the project root.
"""

import base64
import logging
from pathlib import Path

from blob_commit.services.github.exceptions import FileReadError
from blob_commit.services.github.types import EncodedFile, FileDescriptor

logger = logging.getLogger(__name__)


def encode_content(content: str | bytes) -> str:
    """Base64-encode text (as UTF-8) or raw bytes."""
    raw = content.encode("utf-8") if isinstance(content, str) else content
    return base64.b64encode(raw).decode("ascii")


def read_local_file(project_root: Path, path: str) -> bytes:
    """
    Read a file relative to the project root.

    Raises:
        FileReadError: If the file is missing, unreadable, or resolves
            outside the project root
    """
    root = project_root.resolve()
    target = (root / path).resolve()
    if not target.is_relative_to(root):
        raise FileReadError(path, f"outside project root {root}")

    try:
        return target.read_bytes()
    except FileNotFoundError:
        raise FileReadError(path, "no such file") from None
    except IsADirectoryError:
        raise FileReadError(path, "is a directory") from None
    except OSError as e:
        raise FileReadError(path, e.strerror or str(e)) from e


def encode_file(file: FileDescriptor, project_root: Path) -> EncodedFile:
    """Produce the transport payload for one file."""
    if file.content is None:
        logger.debug(f"Reading {file.path} from {project_root}")
        content: str | bytes = read_local_file(project_root, file.path)
    else:
        content = file.content

    return EncodedFile(path=file.path, content=encode_content(content), message=file.message)


def encode_files(files: list[FileDescriptor], project_root: Path) -> list[EncodedFile]:
    """Encode a whole batch. Any read failure aborts before anything is sent."""
    return [encode_file(file, project_root) for file in files]
