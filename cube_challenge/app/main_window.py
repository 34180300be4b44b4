# cube_challenge/app/main_window.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent, QFont
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cube_challenge.app.schedule_worker import ScheduleWorker
from cube_challenge.bot.chat_client import ChatClientError, LocalChatClient
from cube_challenge.bot.lifecycle import ThreadLifecycle
from cube_challenge.bot.scheduler import ChallengeScheduler, TickResult
from cube_challenge.config import Settings
from cube_challenge.core.puzzle_types import PuzzleType
from cube_challenge.core.storage import MemStorage
from cube_challenge.logic.scramble import generate_scramble

log = logging.getLogger(__name__)

PREVIEW_GUILD = "local-guild"
PREVIEW_CHANNEL = "daily-challenge"


class MainWindow(QMainWindow):
    """Dashboard del reto diario de scrambles.

    Esta clase coordina:
    - La generación de scrambles por tipo de puzzle
    - La publicación manual de retos (`ThreadLifecycle`)
    - La pasada periódica del scheduler en segundo plano (`ScheduleWorker`)

    Los hilos se publican en un `LocalChatClient`; la plataforma de chat real
    queda fuera de esta aplicación.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Inicializa la ventana, el almacenamiento y el temporizador del scheduler.

        Args:
            settings: Configuración; None la lee de las variables de entorno.
        """
        super().__init__()
        self.setWindowTitle("Cube Challenge - PySide6")

        # --- Backend ---
        self.settings: Settings = settings or Settings.from_env()
        self.storage = MemStorage(self.settings.storage_path)
        self.client = LocalChatClient()
        self.client.add_channel(PREVIEW_GUILD, PREVIEW_CHANNEL)
        if self.storage.get_bot_config_by_guild_id(PREVIEW_GUILD) is None:
            self.storage.create_bot_config(
                PREVIEW_CHANNEL,
                PREVIEW_GUILD,
                time_to_post=self.settings.post_time,
                timezone=self.settings.timezone,
                delete_after_hours=self.settings.delete_after_hours,
            )
        self.lifecycle = ThreadLifecycle(
            self.storage, self.client, strict=self.settings.strict_types
        )
        self.scheduler = ChallengeScheduler(self.storage, self.lifecycle)
        self._worker: Optional[ScheduleWorker] = None

        # --- UI ---
        root = QWidget()
        layout = QVBoxLayout(root)

        self.lbl_today = QLabel("")
        layout.addWidget(self.lbl_today)
        self.lbl_tomorrow = QLabel("")
        layout.addWidget(self.lbl_tomorrow)

        # Generador
        layout.addWidget(QLabel("Scramble por tipo de puzzle"))
        row_gen = QHBoxLayout()
        self.cmb_puzzle = QComboBox()
        for p in PuzzleType:
            self.cmb_puzzle.addItem(p.value)
        self.btn_generate = QPushButton("Generar")
        row_gen.addWidget(self.cmb_puzzle, 1)
        row_gen.addWidget(self.btn_generate)
        layout.addLayout(row_gen)

        self.txt_scramble = QLineEdit()
        self.txt_scramble.setReadOnly(True)
        self.txt_scramble.setFont(QFont("Monospace"))
        layout.addWidget(self.txt_scramble)

        # Publicación
        row_post = QHBoxLayout()
        self.btn_manual = QPushButton("Publicar reto manual")
        self.btn_run = QPushButton("Ejecutar scheduler ahora")
        row_post.addWidget(self.btn_manual)
        row_post.addWidget(self.btn_run)
        layout.addLayout(row_post)

        layout.addWidget(QLabel("Hilos publicados"))
        self.list_threads = QListWidget()
        layout.addWidget(self.list_threads, 1)

        self.lbl_status = QLabel("Listo.")
        layout.addWidget(self.lbl_status)

        self.setCentralWidget(root)

        # --- Conexiones ---
        self.btn_generate.clicked.connect(self.on_generate)
        self.btn_manual.clicked.connect(self.on_manual_post)
        self.btn_run.clicked.connect(self.run_scheduler)

        # Pasada periódica (equivale al cron horario)
        self.timer = QTimer(self)
        self.timer.setInterval(self.settings.check_interval_minutes * 60 * 1000)
        self.timer.timeout.connect(self.run_scheduler)
        self.timer.start()

        # Reloj del panel "hoy / mañana"
        self.clock_timer = QTimer(self)
        self.clock_timer.setInterval(60 * 1000)
        self.clock_timer.timeout.connect(self._refresh_schedule_labels)
        self.clock_timer.start()

        self._refresh_schedule_labels()
        self._refresh_threads()

    # -------------------
    # Helpers UI
    # -------------------
    def _selected_puzzle(self) -> PuzzleType:
        return PuzzleType.from_tag(self.cmb_puzzle.currentText())

    def _refresh_schedule_labels(self) -> None:
        """Actualiza los labels con el reto de hoy, el de mañana y el tiempo restante."""
        nxt = self.scheduler.next_challenge(tz_name=self.settings.timezone)
        self.lbl_today.setText(f"Hoy ({nxt.day}): {nxt.puzzle.value}")
        self.lbl_tomorrow.setText(
            f"Mañana: {nxt.tomorrow_puzzle.value} (en {nxt.time_until})"
        )

    def _refresh_threads(self) -> None:
        """Recarga la lista de hilos guardados, los más nuevos primero."""
        self.list_threads.clear()
        threads = sorted(
            self.storage.get_all_challenge_threads(),
            key=lambda t: t.created_at,
            reverse=True,
        )
        for t in threads:
            state = "borrado" if t.is_deleted else f"expira {t.expires_at:%Y-%m-%d %H:%M}"
            self.list_threads.addItem(f"[{t.puzzle.value}] {t.scramble}  ({state})")

    def _set_controls_enabled(self, enabled: bool) -> None:
        self.btn_manual.setEnabled(enabled)
        self.btn_run.setEnabled(enabled)

    # -------------------
    # Botones
    # -------------------
    def on_generate(self) -> None:
        """Genera y muestra un scramble para el puzzle seleccionado."""
        self.txt_scramble.setText(generate_scramble(self._selected_puzzle()))

    def on_manual_post(self) -> None:
        """Publica un reto manual del puzzle seleccionado."""
        if self._worker is not None and self._worker.isRunning():
            return
        try:
            thread = self.lifecycle.create_manual_thread(
                PREVIEW_GUILD,
                PREVIEW_CHANNEL,
                self._selected_puzzle(),
                datetime.now(timezone.utc),
            )
        except ChatClientError as exc:
            QMessageBox.warning(self, "No se pudo publicar", str(exc))
            return
        self.txt_scramble.setText(thread.scramble)
        self.lbl_status.setText(f"Reto manual publicado ({thread.puzzle.value}).")
        self._refresh_threads()

    # -------------------
    # Scheduler (thread)
    # -------------------
    def run_scheduler(self) -> None:
        """Lanza una pasada del scheduler en segundo plano (si no hay otra corriendo)."""
        if self._worker is not None and self._worker.isRunning():
            return

        self._set_controls_enabled(False)
        self.lbl_status.setText("Ejecutando scheduler...")

        self._worker = ScheduleWorker(self.scheduler)
        self._worker.finished_tick.connect(self._on_tick_finished)
        self._worker.error.connect(self._on_tick_error)
        self._worker.finished.connect(self._on_worker_finished)
        self._worker.start()

    def _on_tick_finished(self, result: TickResult) -> None:
        self.lbl_status.setText(
            f"Publicados: {len(result.posted)}, retirados: {result.retired}, "
            f"errores: {result.errors}."
        )
        if result.posted:
            self.txt_scramble.setText(result.posted[-1].scramble)
        self._refresh_threads()
        self._refresh_schedule_labels()

    def _on_tick_error(self, msg: str) -> None:
        """Maneja errores emitidos por el hilo del scheduler.

        Args:
            msg: Traceback del error (ya registrado en el log).
        """
        self.lbl_status.setText("Error en el scheduler (revisa el log).")

    def _on_worker_finished(self) -> None:
        """Limpia el worker cuando el hilo finaliza."""
        self._set_controls_enabled(True)
        if self._worker is not None:
            self._worker.deleteLater()
            self._worker = None

    def closeEvent(self, event: QCloseEvent) -> None:
        """Evento de cierre: detiene los timers y espera al worker si está activo.

        Args:
            event: Evento de cierre de Qt.
        """
        self.timer.stop()
        self.clock_timer.stop()
        if self._worker is not None and self._worker.isRunning():
            self._worker.wait(1500)
        event.accept()
