# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Transaction boundary for repositories that own a session factory."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from course_archive.shared.logging import logger


@dataclass(slots=True)
class SqlAlchemyUnitOfWork:
    """One session per block: commit on success, rollback on error.

    ``read_only`` blocks never commit, so aggregate queries cannot flush
    stray changes.
    """

    session_factory: Callable[[], Session]
    read_only: bool = False
    _session: Session | None = field(default=None, init=False)

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self.session_factory()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        session = self.session
        try:
            if exc_type is not None or self.read_only:
                session.rollback()
                if exc_type is not None:
                    logger.debug(f"uow: rolled back after {exc_type.__name__}")
            else:
                session.commit()
        except Exception:
            logger.exception("uow: failed to finish transaction")
            session.rollback()
            raise
        finally:
            session.close()
            self._session = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("unit of work used outside its block")
        return self._session


@contextmanager
def unit_of_work_scope(
    factory: Callable[[], Session], *, read_only: bool = False
) -> Iterator[Session]:
    with SqlAlchemyUnitOfWork(factory, read_only=read_only) as uow:
        yield uow.session


__all__ = ["SqlAlchemyUnitOfWork", "unit_of_work_scope"]
