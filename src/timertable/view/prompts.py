"""
Input Prompts
Modal QInputDialog prompts used by the table commands.
"""
from typing import Optional

from PySide6.QtWidgets import QInputDialog, QLineEdit, QWidget


class QtPrompter:
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        self.parent = parent

    def ask_duration(self, default: Optional[str] = None) -> Optional[str]:
        text, ok = QInputDialog.getText(
            self.parent, "Timer Duration",
            "Duration (5 = minutes, 90s, 1.5h) or clock time (HH:MM):",
            QLineEdit.Normal, default or ""
        )
        return text.strip() if ok else None

    def ask_description(self, default: Optional[str] = None) -> Optional[str]:
        text, ok = QInputDialog.getText(
            self.parent, "Timer Description", "Description (empty for none):",
            QLineEdit.Normal, default or ""
        )
        return text.strip() if ok else None
