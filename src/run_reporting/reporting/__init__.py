from run_reporting.reporting.base_reporter import BaseReporter
from run_reporting.reporting.console_reporter import ConsoleReporter
from run_reporting.reporting.errors import AggregatedReportingError, ReporterFailure, ReportingError
from run_reporting.reporting.report_manager import ReportManager
from run_reporting.reporting.reporter_protocol import ReporterProtocol
from run_reporting.reporting.reporter_registry import ReporterRegistry

__all__ = [
    "AggregatedReportingError",
    "BaseReporter",
    "ConsoleReporter",
    "ReportManager",
    "ReporterFailure",
    "ReporterProtocol",
    "ReporterRegistry",
    "ReportingError",
]
