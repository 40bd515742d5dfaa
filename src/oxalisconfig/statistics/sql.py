"""Dialect specific raw statistics repositories."""

from ..interfaces import StatisticsGranularity
from .base import RawStatisticsRepository


class MySqlRawStatisticsRepository(RawStatisticsRepository):
    """MySQL, via a driver using the "format" parameter style."""

    placeholder = "%s"

    # "%" is doubled since the driver interpolates the statement
    _FORMATS = {
        StatisticsGranularity.YEAR: "%%Y",
        StatisticsGranularity.MONTH: "%%Y-%%m",
        StatisticsGranularity.DAY: "%%Y-%%m-%%d",
        StatisticsGranularity.HOUR: "%%Y-%%m-%%dT%%H",
    }

    def period_expression(self, granularity: StatisticsGranularity) -> str:
        return f"date_format(tstamp, '{self._FORMATS[granularity]}')"


class MsSqlRawStatisticsRepository(RawStatisticsRepository):
    """SQL Server. ISO 8601 style 126 truncated to the period length."""

    _LENGTHS = {
        StatisticsGranularity.YEAR: 4,
        StatisticsGranularity.MONTH: 7,
        StatisticsGranularity.DAY: 10,
        StatisticsGranularity.HOUR: 13,
    }

    def period_expression(self, granularity: StatisticsGranularity) -> str:
        return f"convert(char({self._LENGTHS[granularity]}), tstamp, 126)"


class OracleRawStatisticsRepository(RawStatisticsRepository):
    """Oracle, via a driver using the "numeric" parameter style."""

    _FORMATS = {
        StatisticsGranularity.YEAR: "YYYY",
        StatisticsGranularity.MONTH: "YYYY-MM",
        StatisticsGranularity.DAY: "YYYY-MM-DD",
        StatisticsGranularity.HOUR: 'YYYY-MM-DD"T"HH24',
    }

    def placeholders(self, count: int) -> list[str]:
        return [f":{position}" for position in range(1, count + 1)]

    def period_expression(self, granularity: StatisticsGranularity) -> str:
        return f"to_char(tstamp, '{self._FORMATS[granularity]}')"


class HSqlRawStatisticsRepository(RawStatisticsRepository):
    """HSQLDB."""

    _FORMATS = {
        StatisticsGranularity.YEAR: "YYYY",
        StatisticsGranularity.MONTH: "YYYY-MM",
        StatisticsGranularity.DAY: "YYYY-MM-DD",
        StatisticsGranularity.HOUR: "YYYY-MM-DD HH24",
    }

    def period_expression(self, granularity: StatisticsGranularity) -> str:
        return f"to_char(tstamp, '{self._FORMATS[granularity]}')"
