from dataclasses import dataclass
from enum import IntEnum


class Severity(IntEnum):
    """Check states; the value is the process exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


# Exit codes do not follow badness: UNKNOWN ranks between WARNING and CRITICAL
_BADNESS = {
    Severity.OK: 0,
    Severity.WARNING: 1,
    Severity.UNKNOWN: 2,
    Severity.CRITICAL: 3,
}


def worst(*severities: Severity) -> Severity:
    """Return the worst of the given severities, OK when none are given."""
    if not severities:
        return Severity.OK
    return max(severities, key=_BADNESS.__getitem__)


@dataclass(frozen=True)
class CheckResult:
    check_name: str
    severity: Severity
    message: str = ""

    @property
    def exit_code(self) -> int:
        return int(self.severity)

    def render(self) -> str:
        line = f"{self.check_name} {self.severity.name}"
        if self.message:
            line += f": {self.message}"
        return line

    def __str__(self) -> str:
        return self.render()
