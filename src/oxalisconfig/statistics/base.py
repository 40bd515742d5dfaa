"""Abstract base for raw statistics repositories.

Every SQL dialect gets its own implementation; they share this contract
and differ only in parameter style and date bucketing SQL.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import closing
from datetime import datetime
from typing import Any, Callable, Optional

from ..interfaces import Direction, RawStatistics, StatisticsGranularity, StatisticsRow

logger = logging.getLogger(__name__)

# Returns a new DB-API 2.0 connection; the repository closes it after use
ConnectionFactory = Callable[[], Any]
StatisticsTransformer = Callable[[StatisticsRow], None]


class RawStatisticsRepository(ABC):
    """Stores and aggregates message transmission events.

    Connections are obtained per call from the connection factory and
    always closed. Database errors propagate unchanged after rollback.
    """

    table_name = "raw_stats"
    placeholder = "?"

    def __init__(self, connection_factory: ConnectionFactory):
        self._connection_factory = connection_factory

    @abstractmethod
    def period_expression(self, granularity: StatisticsGranularity) -> str:
        """SQL expression formatting the timestamp column into a period label."""
        pass

    def placeholders(self, count: int) -> list[str]:
        """Bind parameter markers in positional order."""
        return [self.placeholder] * count

    def insert_sql(self) -> str:
        markers = ", ".join(self.placeholders(8))
        return (
            f"INSERT INTO {self.table_name} "
            f"(ap, tstamp, direction, doc_type, profile, channel, sender, receiver) "
            f"VALUES ({markers})"
        )

    def select_sql(self, granularity: StatisticsGranularity) -> str:
        period = self.period_expression(granularity)
        start, end = self.placeholders(2)
        return (
            f"SELECT ap, direction, {period} AS period, doc_type, profile, channel, "
            f"COUNT(*) AS message_count "
            f"FROM {self.table_name} "
            f"WHERE tstamp >= {start} AND tstamp <= {end} "
            f"GROUP BY ap, direction, {period}, doc_type, profile, channel "
            f"ORDER BY period, ap"
        )

    def persist(self, raw: RawStatistics) -> Optional[int]:
        """Insert one event.

        Returns:
            The generated row id, or None when the driver does not report it.
        """
        params = (
            raw.access_point_identifier,
            raw.timestamp,
            raw.direction.value,
            raw.document_type_id,
            raw.process_id,
            raw.channel_id,
            raw.sender,
            raw.receiver,
        )
        with closing(self._connection_factory()) as connection:
            cursor = connection.cursor()
            try:
                cursor.execute(self.insert_sql(), params)
                connection.commit()
                # lastrowid is an optional DB-API extension
                row_id = getattr(cursor, "lastrowid", None)
            except Exception:
                connection.rollback()
                raise
            finally:
                cursor.close()
        return row_id

    def fetch(
        self,
        start: datetime,
        end: datetime,
        granularity: StatisticsGranularity,
    ) -> list[StatisticsRow]:
        """Count events per period bucket between start and end, inclusive."""
        with closing(self._connection_factory()) as connection:
            cursor = connection.cursor()
            try:
                cursor.execute(self.select_sql(granularity), (start, end))
                rows = cursor.fetchall()
            finally:
                cursor.close()

        return [
            StatisticsRow(
                access_point_identifier=ap,
                direction=Direction(direction),
                period=period,
                document_type_id=doc_type,
                process_id=profile,
                channel_id=channel,
                count=int(count),
            )
            for ap, direction, period, doc_type, profile, channel, count in rows
        ]

    def fetch_and_transform(
        self,
        transformer: StatisticsTransformer,
        start: datetime,
        end: datetime,
        granularity: StatisticsGranularity,
    ) -> int:
        """Feed every aggregated row to the transformer.

        Returns:
            Number of rows handed to the transformer.
        """
        rows = self.fetch(start, end, granularity)
        for row in rows:
            transformer(row)
        logger.debug(f"Transformed {len(rows)} statistics rows ({granularity.value})")
        return len(rows)
