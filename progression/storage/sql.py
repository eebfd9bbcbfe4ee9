"""
SQLAlchemy-backed progress store.

Tables:
- learner_progress: one JSON snapshot per learner plus its version
- attempt_log: append-only attempt results

Saves use a conditional UPDATE on the version column so a stale snapshot is
rejected inside the same transaction that would have written it. A completed
attempt writes its snapshot and attempt_log row in one transaction.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from loguru import logger
from sqlalchemy import JSON, DateTime, Integer, Text, create_engine, func, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from progression.config import get_settings
from progression.core.errors import ConcurrentUpdateError, StorageFailureError
from progression.core.models import AttemptResult, LearnerProgress


class Base(DeclarativeBase):
    pass


class LearnerProgressRow(Base):
    """Latest progress snapshot for a learner."""

    __tablename__ = "learner_progress"

    learner_id: Mapped[str] = mapped_column(Text, primary_key=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    snapshot: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now(), onupdate=func.now()
    )


class AttemptLogRow(Base):
    """One logged attempt. Full mistake detail is kept."""

    __tablename__ = "attempt_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    learner_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    lesson_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)


class SqlProgressStore:
    """ProgressStore persisting snapshots and the attempt log through SQLAlchemy."""

    def __init__(self, database_url: str | None = None, engine: Engine | None = None):
        """
        Initialize the store and create its tables.

        Args:
            database_url: Connection string (defaults to settings.database_url)
            engine: Pre-built engine; takes precedence over database_url
        """
        if engine is None:
            settings = get_settings()
            engine = create_engine(
                database_url or settings.database_url,
                echo=settings.log_level == "DEBUG",
                pool_pre_ping=True,
            )
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

        try:
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as e:
            logger.error(f"Failed to initialize progress tables: {e}")
            raise StorageFailureError(f"Cannot initialize progress store: {e}") from e

        logger.info(f"SqlProgressStore initialized at {engine.url.render_as_string(hide_password=True)}")

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Transactional scope; SQLAlchemy errors surface as StorageFailureError."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Progress store operation failed: {e}")
            raise StorageFailureError(str(e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def load(self, learner_id: str) -> LearnerProgress | None:
        with self.session_scope() as session:
            row = session.get(LearnerProgressRow, learner_id)
            if row is None:
                return None
            return LearnerProgress.model_validate({**row.snapshot, "version": row.version})

    def save(self, progress: LearnerProgress) -> LearnerProgress:
        with self.session_scope() as session:
            new_version = self._write_snapshot(session, progress)
        return progress.model_copy(deep=True, update={"version": new_version})

    def append_attempt_log(
        self, learner_id: str, result: AttemptResult, recorded_at: datetime
    ) -> None:
        with self.session_scope() as session:
            self._add_attempt(session, learner_id, result, recorded_at)

    def save_with_attempt(
        self, progress: LearnerProgress, result: AttemptResult, recorded_at: datetime
    ) -> LearnerProgress:
        with self.session_scope() as session:
            new_version = self._write_snapshot(session, progress)
            self._add_attempt(session, progress.learner_id, result, recorded_at)
        return progress.model_copy(deep=True, update={"version": new_version})

    def attempts_for(self, learner_id: str, lesson_id: str) -> list[AttemptResult]:
        with self.session_scope() as session:
            payloads = session.scalars(
                select(AttemptLogRow.payload)
                .where(AttemptLogRow.learner_id == learner_id)
                .where(AttemptLogRow.lesson_id == lesson_id)
                .order_by(AttemptLogRow.id)
            ).all()
            return [AttemptResult.model_validate(payload) for payload in payloads]

    # ========================================
    # Helpers
    # ========================================

    @staticmethod
    def _write_snapshot(session: Session, progress: LearnerProgress) -> int:
        """Insert or conditionally update the snapshot row; returns the new version."""
        new_version = progress.version + 1
        snapshot = progress.model_dump(mode="json", exclude={"version"})

        if progress.version == 0:
            session.add(
                LearnerProgressRow(
                    learner_id=progress.learner_id,
                    version=new_version,
                    snapshot=snapshot,
                )
            )
            try:
                session.flush()
            except IntegrityError:
                session.rollback()
                actual = session.scalar(
                    select(LearnerProgressRow.version).where(
                        LearnerProgressRow.learner_id == progress.learner_id
                    )
                )
                raise ConcurrentUpdateError(progress.learner_id, 0, actual or 0) from None
        else:
            result = session.execute(
                update(LearnerProgressRow)
                .where(LearnerProgressRow.learner_id == progress.learner_id)
                .where(LearnerProgressRow.version == progress.version)
                .values(version=new_version, snapshot=snapshot)
            )
            if result.rowcount != 1:
                actual = session.scalar(
                    select(LearnerProgressRow.version).where(
                        LearnerProgressRow.learner_id == progress.learner_id
                    )
                )
                raise ConcurrentUpdateError(progress.learner_id, progress.version, actual or 0)

        return new_version

    @staticmethod
    def _add_attempt(
        session: Session, learner_id: str, result: AttemptResult, recorded_at: datetime
    ) -> None:
        session.add(
            AttemptLogRow(
                learner_id=learner_id,
                lesson_id=result.lesson_id,
                recorded_at=recorded_at,
                payload=result.model_dump(mode="json"),
            )
        )
