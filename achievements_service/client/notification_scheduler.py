"""
Очередь уведомлений о разблокированных ачивках (клиент)

Одно видимое уведомление за раз. Время показа элементов пачки идёт с
фиксированным шагом от запланированного времени предыдущего, а не от
момента, когда предыдущее скрылось.

Работает на таймерах event loop'а (call_later), ничего не блокирует.
Для тестов можно передать свой loop с методами time() и call_later().
"""
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Iterable, Optional
import asyncio
import enum
import logging

from achievements_service.config import settings

logger = logging.getLogger(__name__)


class NotificationState(str, enum.Enum):
    """Состояние слота уведомления"""
    IDLE = "idle"
    VISIBLE = "visible"
    LEAVING = "leaving"


@dataclass
class ScheduledNotification:
    """Событие разблокировки и запланированное время показа (loop.time(), секунды)"""
    event: Any
    show_at: float


Listener = Callable[[Any], None]


class NotificationScheduler:
    """Очередь + один активный таймер"""

    def __init__(
        self,
        loop=None,
        stagger_ms: int = settings.ACHIEVEMENT_NOTIFICATION_STAGGER_MS,
        display_ms: int = settings.ACHIEVEMENT_NOTIFICATION_DISPLAY_MS,
        exit_ms: int = settings.ACHIEVEMENT_NOTIFICATION_EXIT_MS,
        on_show: Optional[Listener] = None,
        on_leave: Optional[Listener] = None,
        on_hide: Optional[Listener] = None,
    ):
        self._loop = loop
        self.stagger = stagger_ms / 1000
        self.display = display_ms / 1000
        self.exit = exit_ms / 1000
        self.on_show = on_show
        self.on_leave = on_leave
        self.on_hide = on_hide

        self.state = NotificationState.IDLE
        self.current: Optional[ScheduledNotification] = None
        self.queue: Deque[ScheduledNotification] = deque()
        self._last_show_at: Optional[float] = None
        self._timer = None

    @property
    def loop(self):
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    def pending(self) -> int:
        return len(self.queue)

    def enqueue(self, events: Optional[Iterable[Any]]) -> None:
        """
        Поставить пачку событий в очередь

        Первое событие показывается сразу, если ничего не видно и очередь
        пуста. Следующие - через stagger от запланированного времени
        предыдущего. Пачка, пришедшая пока очередь не пуста или уведомление
        ещё на экране, продолжает тот же шаг.
        """
        if not events:
            return

        now = self.loop.time()
        if self.state is NotificationState.IDLE and not self.queue:
            self._last_show_at = None

        added = 0
        for event in events:
            if self._last_show_at is None:
                show_at = now
            else:
                show_at = max(now, self._last_show_at + self.stagger)
            self._last_show_at = show_at
            self.queue.append(ScheduledNotification(event=event, show_at=show_at))
            added += 1

        logger.debug(f"В очередь уведомлений добавлено {added}, всего ожидает {len(self.queue)}")

        if self.state is NotificationState.IDLE:
            self._advance()

    def dismiss(self) -> bool:
        """
        Закрыть видимое уведомление раньше времени

        Отменяет только таймер автоскрытия текущего; расписание остальных не меняется.
        """
        if self.state is not NotificationState.VISIBLE:
            return False
        self._begin_leave()
        return True

    def close(self) -> None:
        """Сбросить очередь и отменить таймер"""
        self._cancel_timer()
        self.queue.clear()
        self.current = None
        self._last_show_at = None
        self.state = NotificationState.IDLE

    def _advance(self) -> None:
        if not self.queue:
            return

        head = self.queue[0]
        now = self.loop.time()
        if head.show_at <= now:
            self.queue.popleft()
            self._show(head)
        else:
            self._set_timer(head.show_at - now, self._advance)

    def _show(self, item: ScheduledNotification) -> None:
        self.state = NotificationState.VISIBLE
        self.current = item
        logger.debug(f"Показ уведомления: {item.event!r}")
        self._notify(self.on_show, item.event)
        self._set_timer(self.display, self._begin_leave)

    def _begin_leave(self) -> None:
        self._cancel_timer()
        self.state = NotificationState.LEAVING
        self._notify(self.on_leave, self.current.event)
        self._set_timer(self.exit, self._finish_leave)

    def _finish_leave(self) -> None:
        item = self.current
        self.current = None
        self.state = NotificationState.IDLE
        self._notify(self.on_hide, item.event)
        self._advance()

    def _set_timer(self, delay: float, callback: Callable[[], None]) -> None:
        self._cancel_timer()
        self._timer = self.loop.call_later(delay, self._fire, callback)

    def _fire(self, callback: Callable[[], None]) -> None:
        self._timer = None
        callback()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    @staticmethod
    def _notify(listener: Optional[Listener], event: Any) -> None:
        if listener is None:
            return
        try:
            listener(event)
        except Exception as e:
            # Ошибка отрисовки не должна ломать очередь
            logger.error(f"❌ Ошибка обработчика уведомления: {e}", exc_info=True)
