"""Reader for report-task.txt, written by the scanner after upload.

The file is a Java properties file, e.g.::

    projectKey=my:project
    serverUrl=http\\://localhost\\:9000
    ceTaskId=AVmFzmR-RIadPZA5ADvR
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sonar_gate.infrastructure.sonar.errors import ReportTaskError

logger = logging.getLogger(__name__)

REPORT_TASK_FILE = "report-task.txt"

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_KEY_TERMINATORS = "=: \t\f"


@dataclass(frozen=True)
class ReportTask:
    """Identifiers of the submitted analysis report."""

    project_key: str
    ce_task_id: str
    properties: dict[str, str] = field(default_factory=dict)

    @property
    def server_url(self) -> str | None:
        return self.properties.get("serverUrl")


def _unescape(text: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\" or i + 1 >= len(text):
            out.append(ch)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == "u" and i + 6 <= len(text):
            try:
                out.append(chr(int(text[i + 2 : i + 6], 16)))
                i += 6
                continue
            except ValueError:
                pass
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _continues(line: str) -> bool:
    """An odd number of trailing backslashes joins the next line."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_entry(entry: str) -> tuple[str, str]:
    i = 0
    while i < len(entry) and entry[i] not in _KEY_TERMINATORS:
        i += 2 if entry[i] == "\\" else 1
    key = entry[:i]
    rest = entry[i:].lstrip(" \t\f")
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(" \t\f")
    return _unescape(key), _unescape(rest)


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java properties text into a dict. Later keys win."""
    properties: dict[str, str] = {}
    pending = ""
    for raw in text.splitlines():
        line = raw.lstrip(" \t\f")
        if not pending and (not line or line[0] in "#!"):
            continue
        if _continues(line):
            pending += line[:-1]
            continue
        key, value = _split_entry(pending + line)
        pending = ""
        properties[key] = value
    if pending:
        key, value = _split_entry(pending)
        properties[key] = value
    return properties


def read_report_task(work_dir: Path | str) -> ReportTask:
    """Load ``work_dir/report-task.txt``.

    Raises:
        ReportTaskError: file missing or unreadable, or ``projectKey`` /
            ``ceTaskId`` absent

    """
    path = Path(work_dir) / REPORT_TASK_FILE
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReportTaskError(f"Unable to load properties from file {path}") from e

    properties = parse_properties(text)
    missing = [k for k in ("projectKey", "ceTaskId") if not properties.get(k)]
    if missing:
        raise ReportTaskError(f"Missing {', '.join(missing)} in {path}")

    logger.debug("Loaded report task %s for %s", properties["ceTaskId"], properties["projectKey"])
    return ReportTask(
        project_key=properties["projectKey"],
        ce_task_id=properties["ceTaskId"],
        properties=properties,
    )
