"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod

from numberones.domain.entities import ChartEntry


class IChartFetcher(ABC):
    """Port for fetching one date's chart-topping entry from a live source."""

    @abstractmethod
    async def fetch_remote(
        self, year: int | str, month: int | str, day: int | str
    ) -> ChartEntry:
        """
        Fetch the #1 single for the given date.

        Args:
            year: Four-digit year
            month: Month (1-12, padded or not)
            day: Day of month (padded or not)

        Returns:
            ChartEntry for the date

        Raises:
            FetchError: If the source is unreachable or the response is unusable
        """
        pass


__all__ = ["IChartFetcher"]
