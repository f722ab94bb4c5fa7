from __future__ import annotations
from pathlib import Path
from typing import Callable, Mapping, Optional
import logging
import threading
import time
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

from instabase.config import settings
from instabase.commands.generate import run_generate

logger = logging.getLogger(__name__)

class SchemaChangeHandler(FileSystemEventHandler):
    def __init__(
        self,
        path: Path,
        out_dir: Path | None,
        vector_flags: Optional[Mapping[str, bool]],
        debounce: float | None = None,
        on_change: Callable[..., object] = run_generate,
    ):
        self.path = path
        self.out_dir = out_dir
        self.vector_flags = dict(vector_flags or {})
        self.debounce = settings.watch_debounce if debounce is None else debounce
        self.on_change = on_change
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    def _relevant(self, p: Path) -> bool:
        if self.path.is_file():
            return p.resolve() == self.path.resolve()
        return p.suffix.lower() == ".d2"

    def on_any_event(self, event):
        if event.is_directory:
            return
        # 원자적 저장(임시 파일 → rename)은 dest_path 쪽에만 .d2 가 있다
        paths = [event.src_path, getattr(event, "dest_path", "")]
        hits = [Path(s) for s in paths if s and self._relevant(Path(s))]
        if not hits:
            return

        logger.debug("%s changed (%s)", hits[-1], event.event_type)
        if self.debounce <= 0:
            self._regenerate()
            return

        # 저장 한 번에 이벤트가 여러 개(truncate → write) 오므로
        # 마지막 이벤트 후 debounce 동안 조용해지면 한 번만 재생성
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce, self._regenerate)
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def flush(self) -> None:
        """대기 중인 재생성이 있으면 바로 실행."""
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
            self._regenerate()

    def cancel(self) -> None:
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def _regenerate(self) -> None:
        with self._lock:
            if self._timer is threading.current_thread():
                self._timer = None
        logger.debug("regenerating %s", self.path)
        self.on_change(self.path, out_dir=self.out_dir, vector_flags=self.vector_flags)

def watch_schema(
    path: Path,
    out_dir: Path | None = None,
    vector_flags: Optional[Mapping[str, bool]] = None,
) -> None:
    # 시작 시 한 번 생성한 뒤, 변경될 때마다 전체를 다시 생성
    run_generate(path, out_dir=out_dir, vector_flags=vector_flags)

    handler = SchemaChangeHandler(path, out_dir, vector_flags)
    watch_dir = path.parent if path.is_file() else path
    obs = Observer()
    obs.schedule(handler, str(watch_dir), recursive=path.is_dir())
    obs.start()
    try:
        while True:
            time.sleep(1)
    finally:
        handler.cancel()
        obs.stop()
        obs.join()
