"""CLI subapps: one module per tool (config)."""

from chat2pdf.tools.config import config_app

__all__ = ["config_app"]
