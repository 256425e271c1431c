# backend/__init__.py
"""
╔════════════════════════════════════════════════════════════════════════════╗
║  DataLens - Backend                                                       ║
║  ─────────────────────────────────────────────────────────────────────────  ║
║  Caller-side context around the analysis engine                          ║
╚════════════════════════════════════════════════════════════════════════════╝

Backend Components:
    • Session Manager: current file, Records, Analysis and chart selection

Integration:
    - core.data_loader → CSV ingestion
    - agents.eda → Analysis and chart series
    - services.report → JSON export
"""

from __future__ import annotations

__version__ = "1.0.0"
