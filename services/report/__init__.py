"""Report export (JSON)."""

from services.report.report_service import (  # noqa: F401
    build_report,
    render_report_json,
    report_filename,
    save_report,
)
