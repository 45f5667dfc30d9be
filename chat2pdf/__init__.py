"""
chat2pdf: saved ChatGPT conversation → paginated PDF.

Use as a library:

    from chat2pdf import export_chat_to_pdf
    result = export_chat_to_pdf("chat.html", output_dir="exports", role_filter="assistant")

Or run the CLI:

    chat2pdf export chat.html -o exports --filter assistant
"""

from chat2pdf.api import export_chat_to_pdf
from chat2pdf.models import ExportResult, LayoutConfig
from chat2pdf.nodes import ContentNode, Document, Message, RoleFilter

__all__ = [
    "export_chat_to_pdf",
    "ExportResult",
    "LayoutConfig",
    "ContentNode",
    "Document",
    "Message",
    "RoleFilter",
]
