from __future__ import annotations

from .report import save_run_report, stamp_report_payload

__all__ = ["save_run_report", "stamp_report_payload"]
