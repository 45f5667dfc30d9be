#!/usr/bin/env python3
"""
Export all saved conversation pages in saved_chats/ to exports/.

Run from repo root:
    python scripts/export_saved_chats.py
"""
from pathlib import Path

from chat2pdf import export_chat_to_pdf

REPO_ROOT = Path(__file__).resolve().parent.parent
SAVED_CHATS = REPO_ROOT / "saved_chats"
EXPORTS = REPO_ROOT / "exports"


def main() -> None:
    if not SAVED_CHATS.is_dir():
        print(f"Missing {SAVED_CHATS}")
        return
    pages = sorted([*SAVED_CHATS.glob("*.html"), *SAVED_CHATS.glob("*.htm")])
    if not pages:
        print(f"No saved pages in {SAVED_CHATS}")
        return
    for page in pages:
        print(f"Exporting {page.name} → {EXPORTS} ...")
        result = export_chat_to_pdf(page, EXPORTS)
        if result.success:
            print(f"  {result.message}")
        else:
            print(f"  Error: {result.error}")


if __name__ == "__main__":
    main()
