from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable


class Severity(StrEnum):
    Error = "error"
    Warning = "warning"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    summary: str
    detail: str = ""
    attribute: str | None = None

    def __str__(self) -> str:
        text = f"{self.severity}: {self.summary}"
        if self.attribute:
            text = f"{text} (at {self.attribute})"
        if self.detail:
            text = f"{text}\n  {self.detail}"
        return text


class Diagnostics(list[Diagnostic]):
    """Errors and warnings reported by a lifecycle operation, empty on success"""

    @classmethod
    def from_err(cls, err: BaseException | None) -> "Diagnostics":
        if err is None:
            return cls()
        return cls([Diagnostic(Severity.Error, str(err) or type(err).__name__)])

    @classmethod
    def from_messages(
        cls, warnings: Iterable[str], errors: Iterable[str]
    ) -> "Diagnostics":
        diags = cls()
        for warning in warnings:
            diags.append_warning(warning)
        for error in errors:
            diags.append_error(error)
        return diags

    def append_error(
        self, summary: str, detail: str = "", attribute: str | None = None
    ) -> None:
        self.append(Diagnostic(Severity.Error, summary, detail, attribute))

    def append_warning(
        self, summary: str, detail: str = "", attribute: str | None = None
    ) -> None:
        self.append(Diagnostic(Severity.Warning, summary, detail, attribute))

    def errors(self) -> list[Diagnostic]:
        return [d for d in self if d.severity == Severity.Error]

    def warnings(self) -> list[Diagnostic]:
        return [d for d in self if d.severity == Severity.Warning]

    def has_error(self) -> bool:
        return any(d.severity == Severity.Error for d in self)
