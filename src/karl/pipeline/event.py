"""LogEvent and process identity."""
from __future__ import annotations

import dataclasses
import os
import socket
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from karl.pipeline.callsite import CallSite
from karl.pipeline.levels import Level

ANONYMOUS_FUNCTION = "<anonymous>"


@dataclasses.dataclass(frozen=True)
class ProcessInfo:
    """Display name and pid of the running process."""
    name: str
    pid: int

    @classmethod
    def current(cls) -> "ProcessInfo":
        return cls(name=_application_name(), pid=os.getpid())

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "pid": self.pid}


def _application_name(main: Any = None) -> str:
    if main is None:
        main = sys.modules.get("__main__")
    entry = Path(getattr(main, "__file__", None) or (sys.argv[0] if sys.argv else ""))
    name = entry.stem
    if name == "__main__":
        # python -m package, or a directory/zip run as a script
        spec = getattr(main, "__spec__", None)
        module = spec.name.removesuffix(".__main__") if spec is not None else ""
        name = module.rpartition(".")[2] if module != "__main__" else ""
        name = name or entry.parent.name
    return name or "python"


#: Captured once at import; identical for every event of this process.
PROCESS = ProcessInfo.current()


def format_timestamp(timestamp: datetime) -> str:
    """ISO-8601 with millisecond precision, UTC rendered as ``Z``."""
    text = timestamp.isoformat(timespec="milliseconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def _relative_dir(file_name: str) -> str:
    directory = os.path.dirname(os.path.abspath(file_name))
    try:
        return os.path.relpath(directory, os.getcwd())
    except ValueError:
        # different drive on Windows
        return directory


@dataclasses.dataclass(frozen=True)
class LogEvent:
    """One captured log call, ready to be rendered."""

    timestamp: datetime
    level: Level
    host_name: str
    process: ProcessInfo
    message: str
    file_name: str | None = None
    file_path: str | None = None
    line_number: int | None = None
    function_name: str = ANONYMOUS_FUNCTION

    @classmethod
    def build(
        cls,
        *,
        timestamp: datetime,
        level: Level,
        message: str,
        call_site: CallSite,
        process: ProcessInfo | None = None,
        host_name: str | None = None,
    ) -> "LogEvent":
        """Assemble an event from a resolved call site.

        Location fields are filled all together or not at all.
        """
        full_name = call_site.get_file_name()
        line_number = call_site.get_line_number()
        function_name = call_site.get_function_name() or ANONYMOUS_FUNCTION
        if full_name is None or line_number is None:
            file_name = file_path = None
            line_number = None
            function_name = ANONYMOUS_FUNCTION
        else:
            file_name = os.path.basename(full_name)
            file_path = _relative_dir(full_name)
        return cls(
            timestamp=timestamp,
            level=level,
            host_name=host_name if host_name is not None else socket.gethostname(),
            process=process or PROCESS,
            message=message,
            file_name=file_name,
            file_path=file_path,
            line_number=line_number,
            function_name=function_name,
        )

    def to_record(self) -> dict[str, Any]:
        """Wire representation; a fresh dict that ``enrich`` may mutate."""
        return {
            "timestamp": format_timestamp(self.timestamp),
            "level": self.level.value,
            "hostName": self.host_name,
            "process": self.process.to_dict(),
            "message": self.message,
            "fileName": self.file_name,
            "filePath": self.file_path,
            "lineNumber": self.line_number,
            "functionName": self.function_name,
        }


__all__ = [
    "ANONYMOUS_FUNCTION",
    "PROCESS",
    "LogEvent",
    "ProcessInfo",
    "format_timestamp",
]
