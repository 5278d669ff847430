"""Lock-guarded scene shared between render workers and scene writers.

Render workers hold the read side of a ReadWriteLock for the whole time they
spend on their row band; anything that mutates the scene (an animation step,
an interactive edit) takes the write side. A writer therefore waits until no
band is being rendered, and no band starts while a writer is active.

The lock prefers writers: once a writer is waiting, new readers queue behind
it, so back-to-back frames cannot starve a scene update.

Example:
    >>> shared = SharedScene(scene)
    >>> with shared.read() as snapshot:
    ...     count = len(snapshot.spheres)
    >>> with shared.write() as editable:
    ...     editable.spheres[0].radius = 2.0
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import TypeVar

from whitted.scene.model import Scene

T = TypeVar("T")


class ReadWriteLock:
    """Many concurrent readers or a single writer, writers preferred."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a matching acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without a matching acquire_write()")
            self._writer = False
            self._cond.notify_all()

    @property
    def readers(self) -> int:
        """Number of readers currently holding the lock."""
        with self._cond:
            return self._readers

    @property
    def write_locked(self) -> bool:
        """Whether a writer currently holds the lock."""
        with self._cond:
            return self._writer

    @contextmanager
    def reading(self) -> Generator[None, None, None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def writing(self) -> Generator[None, None, None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class SharedScene:
    """A Scene paired with the ReadWriteLock that guards it.

    Attributes:
        lock: The lock guarding the scene. Exposed for tests and for callers
            that need to coordinate other state with scene updates.
    """

    def __init__(self, scene: Scene) -> None:
        self._scene = scene
        self.lock = ReadWriteLock()

    @contextmanager
    def read(self) -> Generator[Scene, None, None]:
        """Hold the shared lock and yield the scene.

        The yielded scene must not be mutated.
        """
        with self.lock.reading():
            yield self._scene

    @contextmanager
    def write(self) -> Generator[Scene, None, None]:
        """Hold the exclusive lock and yield the scene for mutation."""
        with self.lock.writing():
            yield self._scene

    def update(self, fn: Callable[[Scene], T]) -> T:
        """Apply ``fn`` to the scene under the exclusive lock."""
        with self.write() as scene:
            return fn(scene)

    def replace(self, scene: Scene) -> None:
        """Swap in a different scene under the exclusive lock."""
        with self.lock.writing():
            self._scene = scene

    def snapshot(self) -> Scene:
        """Return a deep copy of the scene taken under the shared lock."""
        with self.read() as scene:
            return scene.copy()

    def __repr__(self) -> str:
        return f"SharedScene(spheres={len(self._scene.spheres)}, lights={len(self._scene.lights)})"


def as_shared(scene: Scene | SharedScene) -> SharedScene:
    """Return ``scene`` itself if already shared, else wrap it in a new SharedScene."""
    if isinstance(scene, SharedScene):
        return scene
    return SharedScene(scene)
