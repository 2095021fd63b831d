"""Observer pattern for validation diagnostics."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from rich.console import Console

from .models import DiagnosticMessage, Severity

SEVERITY_STYLES: Dict[Severity, str] = {
    Severity.ERROR: "red",
    Severity.WARN: "yellow",
    Severity.INFO: "cyan",
    Severity.DEBUG: "white",
}


class DiagnosticObserver(ABC):
    """Abstract base class for diagnostic sinks."""

    @abstractmethod
    def on_diagnostic(self, message: DiagnosticMessage) -> None:
        """Called for every diagnostic line a validation run produces."""
        pass

    def emit(self, text: str, severity: Severity = Severity.INFO) -> None:
        self.on_diagnostic(DiagnosticMessage(text=text, severity=severity))


class ConsoleDiagnosticObserver(DiagnosticObserver):
    """Observer that prints diagnostics to the console, coloured by severity."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def on_diagnostic(self, message: DiagnosticMessage) -> None:
        style = SEVERITY_STYLES.get(message.severity, "cyan")
        # markup off so messages containing [brackets] print verbatim
        self.console.print(message.text, style=style, markup=False, highlight=False)


class FileDiagnosticObserver(DiagnosticObserver):
    """Observer that appends diagnostics to a log file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def on_diagnostic(self, message: DiagnosticMessage) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a", encoding="utf-8") as f:
            f.write(f"{timestamp} - {message.severity.value.upper()} - {message.text}\n")


class RecordingObserver(DiagnosticObserver):
    """Observer that keeps every diagnostic in memory."""

    def __init__(self):
        self.messages: List[DiagnosticMessage] = []

    def on_diagnostic(self, message: DiagnosticMessage) -> None:
        self.messages.append(message)

    @property
    def texts(self) -> List[str]:
        return [message.text for message in self.messages]

    def clear(self) -> None:
        self.messages.clear()


class CompositeObserver(DiagnosticObserver):
    """Observer that forwards each diagnostic to several observers."""

    def __init__(self, observers: Iterable[DiagnosticObserver] = ()):
        self.observers: List[DiagnosticObserver] = list(observers)

    def add_observer(self, observer: DiagnosticObserver) -> None:
        self.observers.append(observer)

    def on_diagnostic(self, message: DiagnosticMessage) -> None:
        for observer in self.observers:
            observer.on_diagnostic(message)
