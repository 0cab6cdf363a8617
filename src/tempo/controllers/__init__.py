"""Command handlers."""

from tempo.controllers.end import EndController
from tempo.controllers.report import ReportController
from tempo.controllers.start import StartController

__all__ = ["StartController", "EndController", "ReportController"]
