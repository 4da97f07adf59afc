"""
Networked summary store on top of SQLAlchemy.

One row per cache key. Expiration is native to the row (expires_at), and
conditional writes are a single UPDATE guarded by the previously observed
generated_at, so several service instances can share the store safely.
"""

import logging
import time
from typing import Any, Dict, Optional

from sqlalchemy import BigInteger, Column, Float, String, Text, create_engine, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from cache.base import CacheEntry, SummaryStore
from common.errors import CacheUnavailable, MalformedCacheEntry
from utils.config import DEFAULT_CACHE_KEY

logger = logging.getLogger(__name__)

Base = declarative_base()


class SummaryRecord(Base):
    """
    Stored summary row.

    Attributes:
        cache_key: Logical cache key
        generated_at: Milliseconds since epoch
        payload: Summary text
        expires_at: Epoch seconds after which the row is ignored, or NULL
    """
    __tablename__ = 'summary_cache'

    cache_key = Column(String(128), primary_key=True)
    generated_at = Column(BigInteger, nullable=False)
    payload = Column(Text, nullable=False)
    expires_at = Column(Float, nullable=True)


class SQLStore(SummaryStore):
    """
    Summary store backed by any SQLAlchemy-supported database.
    """

    def __init__(
        self,
        url: str = "sqlite:///summary_cache.db",
        key: str = DEFAULT_CACHE_KEY,
        ttl_seconds: Optional[float] = None,
        engine=None
    ):
        """
        Initialize the SQL store.

        Args:
            url: SQLAlchemy database URL
            key: Logical cache key
            ttl_seconds: Native expiration for written rows, in seconds
            engine: Optional pre-built engine (overrides url)
        """
        super().__init__(key)
        self.url = url
        self.ttl_seconds = ttl_seconds
        self.engine = engine if engine is not None else create_engine(url, pool_pre_ping=True)
        self.Session = sessionmaker(bind=self.engine)
        self._schema_ready = False

        logger.info(f"Initialized SQLStore with key={key}, ttl_seconds={ttl_seconds}")

    def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise CacheUnavailable(f"Cannot initialize summary_cache table: {e}") from e
        self._schema_ready = True

    def _expires_at(self) -> Optional[float]:
        if self.ttl_seconds is None:
            return None
        return time.time() + self.ttl_seconds

    def _load(self) -> Optional[CacheEntry]:
        self._ensure_schema()
        try:
            session = self.Session()
            try:
                row = session.get(SummaryRecord, self.key)
            finally:
                session.close()
        except SQLAlchemyError as e:
            raise CacheUnavailable(f"Error reading summary_cache: {e}") from e

        if row is None:
            return None
        if row.expires_at is not None and row.expires_at <= time.time():
            logger.debug(f"Row for {self.key} has expired")
            return None
        if row.generated_at is None or row.payload is None:
            raise MalformedCacheEntry(f"Incomplete row for {self.key}")
        return CacheEntry(generated_at=int(row.generated_at), payload=row.payload)

    def read(self) -> Optional[CacheEntry]:
        try:
            return self._load()
        except MalformedCacheEntry as e:
            logger.error(f"{e}; treating as cache miss")
        except CacheUnavailable as e:
            logger.error(f"{e}; treating as cache miss")
        return None

    def write(self, entry: CacheEntry) -> bool:
        session = self.Session()
        try:
            self._ensure_schema()
            session.merge(SummaryRecord(
                cache_key=self.key,
                generated_at=entry.generated_at,
                payload=entry.payload,
                expires_at=self._expires_at()
            ))
            session.commit()
            logger.info(f"Cache updated for key {self.key}")
            return True
        except (SQLAlchemyError, CacheUnavailable) as e:
            session.rollback()
            logger.error(f"Error writing summary_cache: {e}; write skipped")
            return False
        finally:
            session.close()

    def compare_and_write(self, entry: CacheEntry, expected_generated_at: Optional[int]) -> bool:
        values = {
            SummaryRecord.generated_at: entry.generated_at,
            SummaryRecord.payload: entry.payload,
            SummaryRecord.expires_at: self._expires_at(),
        }
        session = self.Session()
        try:
            self._ensure_schema()
            query = session.query(SummaryRecord).filter(SummaryRecord.cache_key == self.key)

            if expected_generated_at is not None:
                updated = query.filter(
                    SummaryRecord.generated_at == expected_generated_at
                ).update(values, synchronize_session=False)
            else:
                # Nothing live was observed: an expired or malformed row may be replaced
                updated = query.filter(or_(
                    SummaryRecord.expires_at <= time.time(),
                    SummaryRecord.generated_at < 0
                )).update(values, synchronize_session=False)
                if not updated:
                    session.add(SummaryRecord(
                        cache_key=self.key,
                        generated_at=entry.generated_at,
                        payload=entry.payload,
                        expires_at=values[SummaryRecord.expires_at]
                    ))
                    session.flush()
                    updated = 1

            if not updated:
                session.rollback()
                logger.info(
                    f"Conditional write rejected for key {self.key}: "
                    f"stored entry no longer matches {expected_generated_at}"
                )
                return False

            session.commit()
            logger.info(f"Cache updated for key {self.key}")
            return True
        except IntegrityError:
            session.rollback()
            logger.info(f"Conditional write rejected for key {self.key}: row created concurrently")
            return False
        except (SQLAlchemyError, CacheUnavailable) as e:
            session.rollback()
            logger.error(f"Error writing summary_cache: {e}; write skipped")
            return False
        finally:
            session.close()

    def describe(self) -> Dict[str, Any]:
        return {
            'backend': 'sql',
            'key': self.key,
            'url': self.engine.url.render_as_string(hide_password=True),
            'ttl_seconds': self.ttl_seconds,
        }
