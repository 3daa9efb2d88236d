"""Distribution metadata shared by the CLI banner and tests.

Values fall back to the literals below when the package runs from a source
checkout without installed metadata.
"""

from __future__ import annotations

import sys
from importlib import metadata
from typing import Callable

name = "log_channel"
title = "Channel-based logging façade with handler and processor stacks"
shell_command = "log-channel"
homepage = "https://example.invalid/log_channel"
author = "log_channel maintainers"


def _installed_version() -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "0.1.0"


version = _installed_version()


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Emit the metadata banner line by line through ``writer``.

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for log_channel:\\n'
    """

    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("shell_command", shell_command),
    )
    write = writer if writer is not None else sys.stdout.write
    pad = max(len(label) for label, _ in fields)
    write(f"Info for {name}:\n")
    write("\n")
    for label, value in fields:
        write(f"    {label:<{pad}} = {value}\n")


__all__ = ["author", "homepage", "name", "print_info", "shell_command", "title", "version"]
