"""Input helpers for the command line tool."""

from pathlib import Path
from typing import List, Union

from minimail.utils.errors import ErrorHandler, InputError
from minimail.utils.logging import get_logger

logger = get_logger(__name__)


@ErrorHandler.wrap
def load_body(path: Union[str, Path]) -> str:
    """Read the whole body file as text.

    Raises:
        InputError: If the file is missing, unreadable or empty
    """
    body_path = Path(path).expanduser()

    if not body_path.is_file():
        raise InputError(f"Body file not found: {body_path}", details={"path": str(body_path)})

    try:
        body = body_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise InputError(f"Failed to read body file: {e}", details={"path": str(body_path)}) from e

    if not body:
        raise InputError(f"Body file is empty: {body_path}", details={"path": str(body_path)})

    logger.debug(f"Loaded {len(body)} characters of body from {body_path}")
    return body


def parse_recipients(value: str) -> List[str]:
    """Split a comma-separated address list, dropping blanks."""
    return [address.strip() for address in value.split(",") if address.strip()]
