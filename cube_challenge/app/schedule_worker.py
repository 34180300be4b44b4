# cube_challenge/app/schedule_worker.py
from __future__ import annotations

import logging
import traceback
from datetime import datetime
from typing import Optional

from PySide6.QtCore import QThread, Signal

from cube_challenge.bot.scheduler import ChallengeScheduler, TickResult

log = logging.getLogger(__name__)


class ScheduleWorker(QThread):
    """Hilo de trabajo que ejecuta una pasada del scheduler sin bloquear la UI.

    Publica los retos pendientes y retira los hilos vencidos llamando a
    `ChallengeScheduler.run_once`, y avisa del resultado por señales.

    Signals:
        finished_tick(object): Se emite al terminar con el `TickResult`.
        error(str): Se emite con el traceback si ocurre una excepción.
    """

    finished_tick = Signal(object)  # TickResult
    error = Signal(str)             # traceback si algo falla

    def __init__(self, scheduler: ChallengeScheduler, now: Optional[datetime] = None) -> None:
        """Crea el worker.

        Args:
            scheduler: Scheduler cuya pasada se ejecuta.
            now: Instante a usar en la pasada; None usa la hora actual.
        """
        super().__init__()
        self.scheduler: ChallengeScheduler = scheduler
        self.now: Optional[datetime] = now

    def run(self) -> None:
        """Punto de entrada del hilo."""
        try:
            result: TickResult = self.scheduler.run_once(self.now)
            self.finished_tick.emit(result)
        except Exception:
            msg = traceback.format_exc()
            log.error("Scheduler worker failed:\n%s", msg)
            self.error.emit(msg)
