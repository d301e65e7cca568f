"""
Main Application Window
=======================
Hosts the timer table, the Timers menu and the status bar.

Why is this file needed?
------------------------
1. Routing: it binds keyboard shortcuts and menu entries to table commands.
2. Error surface: command failures end up here, as a status bar message for
   a missing selection and as a message box for everything else.
3. Live updates: when the engine reports a finished timer the table is
   re-projected while the cursor stays on the same timer.
"""
import logging
from typing import Callable, Optional

from PySide6.QtWidgets import QMainWindow, QMessageBox
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence

from timertable.config import (
    KEY_BINDINGS, VISIBLE_APP_NAME, CLONE_OPTIONS, CLONE_PROMPT_OPTIONS, RESCHEDULE_OPTIONS
)
from timertable.controller.commands import CommandDispatcher
from timertable.model.engine import InMemoryTimerEngine
from timertable.model.errors import TimerTableError, NoSelectionError, InvalidDurationError
from timertable.model.state import ViewState
from timertable.model.timer import Timer
from timertable.view.prompts import QtPrompter
from timertable.view.timer_table import TimerTableWidget

logger = logging.getLogger(__name__)

STATUS_TIMEOUT_MS = 4000


class MainWindow(QMainWindow):
    def __init__(self, engine: InMemoryTimerEngine) -> None:
        super().__init__()
        self.engine = engine
        self.state = ViewState(engine)

        self.resize(720, 420)

        self.table = TimerTableWidget(self)
        self.setCentralWidget(self.table)

        self.dispatcher = CommandDispatcher(self.state, self.table, QtPrompter(self))

        # --- SIGNAL CONNECTIONS ---
        self.table.selection_changed.connect(self.state.select)
        self.engine.timer_finished.connect(self.on_timer_finished)
        self.engine.timer_cancelled.connect(self.on_timer_cancelled)

        self._create_actions()
        self._create_menus()

        # Initial Render
        self.run_command(self.dispatcher.refresh_view)

    def _create_actions(self) -> None:
        def action(name: str, text: str, slot: Callable[[], object]) -> QAction:
            act = QAction(text, self)
            act.setShortcut(QKeySequence(KEY_BINDINGS[name]))
            act.setShortcutContext(Qt.WindowShortcut)
            act.triggered.connect(lambda: self.run_command(slot))
            self.addAction(act)
            return act

        d = self.dispatcher
        self.act_add = action("add", "Add Timer...", d.add)
        self.act_cancel = action("cancel", "Cancel Timer", d.cancel)
        self.act_clone = action("clone", "Clone Timer", lambda: d.clone(CLONE_OPTIONS))
        self.act_clone_prompt = action("clone_prompt", "Clone Timer With Changes...",
                                       lambda: d.clone(CLONE_PROMPT_OPTIONS))
        self.act_reschedule = action("reschedule", "Reschedule Timer...",
                                     lambda: d.reschedule(RESCHEDULE_OPTIONS))
        self.act_edit = action("edit_description", "Edit Description...", d.edit_description)
        self.act_remove_finished = action("remove_finished", "Remove Finished Timers", d.remove_finished)
        self.act_refresh = action("refresh", "Refresh", d.refresh_view)

        self.act_close = QAction("Close", self)
        self.act_close.setShortcut(QKeySequence(KEY_BINDINGS["close"]))
        self.act_close.triggered.connect(self.close)
        self.addAction(self.act_close)

    def _create_menus(self) -> None:
        menu = self.menuBar().addMenu("&Timers")
        menu.addAction(self.act_add)
        menu.addSeparator()
        menu.addAction(self.act_cancel)
        menu.addAction(self.act_clone)
        menu.addAction(self.act_clone_prompt)
        menu.addAction(self.act_reschedule)
        menu.addAction(self.act_edit)
        menu.addSeparator()
        menu.addAction(self.act_remove_finished)
        menu.addAction(self.act_refresh)
        menu.addSeparator()
        menu.addAction(self.act_close)

    # --- HELPER METHODS ---

    def update_window_title(self) -> None:
        count = len(self.state.rows)
        self.setWindowTitle(f"{VISIBLE_APP_NAME} - [{count} timer{'s' if count != 1 else ''}]")

    def run_command(self, command: Callable[[], object]) -> Optional[object]:
        """Runs a table command and reports failures to the user."""
        try:
            return command()
        except NoSelectionError as e:
            logger.debug(f"Command skipped: {e}")
            self.statusBar().showMessage(str(e), STATUS_TIMEOUT_MS)
        except InvalidDurationError as e:
            logger.warning(str(e))
            QMessageBox.warning(self, "Invalid Input", str(e))
        except TimerTableError as e:
            logger.exception("Timer command failed")
            QMessageBox.critical(self, "Timer Error", str(e))
        finally:
            self.update_window_title()
        return None

    # --- SLOTS ---

    def on_timer_finished(self, timer: Timer) -> None:
        self.run_command(self.dispatcher.refresh_view)
        label = timer.description or f"started {timer.created:%H:%M:%S}"
        self.statusBar().showMessage(f"Timer finished: {label}", STATUS_TIMEOUT_MS)

    def on_timer_cancelled(self, timer: Timer) -> None:
        label = timer.description or f"started {timer.created:%H:%M:%S}"
        self.statusBar().showMessage(f"Timer cancelled: {label}", STATUS_TIMEOUT_MS)
