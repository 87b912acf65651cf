"""Shared plumbing: configuration, logging, error reports."""

from .config import PayloadConfig, load_payload_config, parse_size
from .error_reporting import ErrorReport, get_error_reports_dir, write_error_report
from .logging import configure_logging

__all__ = [
	"PayloadConfig",
	"load_payload_config",
	"parse_size",
	"configure_logging",
	"ErrorReport",
	"get_error_reports_dir",
	"write_error_report",
]
