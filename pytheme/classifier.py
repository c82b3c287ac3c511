"""Binary/text classification of theme files.

The store accepts text assets as a plain ``value`` and everything else as a
base64 ``attachment``. Sending a binary file as text corrupts it, so any
extension not known to be text is treated as binary.
"""

from pathlib import PurePosixPath
from typing import Literal

BINARY_EXTENSIONS = frozenset(
    {
        "png",
        "gif",
        "jpg",
        "jpeg",
        "eot",
        "svg",
        "ttf",
        "woff",
        "otf",
        "swf",
        "ico",
        "pdf",
    }
)

TEXT_EXTENSIONS = frozenset(
    {"liquid", "css", "scss", "sass", "js", "json", "html", "htm", "txt"}
)

# Text formats only recognizable by their last two extensions
TEXT_COMPOUND_EXTENSIONS = frozenset({"js.map", "css.map"})

TransferEncoding = Literal["attachment", "value"]


def extension_chain(path: str) -> list[str]:
    """Return the lower-cased extensions of a file name, left to right.

    Examples:
        >>> extension_chain("assets/style.SASS.liquid")
        ['sass', 'liquid']
        >>> extension_chain(".htaccess")
        []
    """
    name = PurePosixPath(path.replace("\\", "/")).name.lstrip(".")
    parts = name.split(".")[1:]
    return [part.lower() for part in parts if part]


def is_binary(path: str) -> bool:
    """Decide whether a file must be transferred as binary.

    Args:
        path: File path or name

    Returns:
        True for known binary formats and anything unrecognized

    Examples:
        >>> is_binary("hello.png")
        True
        >>> is_binary("omg.wut")
        True
        >>> is_binary("style.sass.liquid")
        False
        >>> is_binary("application.js.map")
        False
    """
    extensions = extension_chain(path)
    if not extensions:
        return True

    last = extensions[-1]
    if last in BINARY_EXTENSIONS:
        return True
    if last in TEXT_EXTENSIONS:
        return False
    if len(extensions) >= 2 and ".".join(extensions[-2:]) in TEXT_COMPOUND_EXTENSIONS:
        return False
    return True


def transfer_encoding(path: str) -> TransferEncoding:
    """Return the asset field used to send a file's content."""
    return "attachment" if is_binary(path) else "value"
