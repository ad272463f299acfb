"""
Schedule Service port interface.

The schedule generation algorithm is remote; this port only forwards a
validated ScheduleConfig and returns the service's JSON unchanged.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from route_explorer.schemas.schedule import ScheduleConfig


class ScheduleService(ABC):
    """Abstract interface for the remote schedule generation service."""

    @abstractmethod
    async def validate_config(self, config: ScheduleConfig) -> Dict[str, Any]:
        """
        Ask the service to validate a configuration without generating.

        Raises:
            ScheduleServiceError: If the service call fails.
        """
        ...

    @abstractmethod
    async def generate(self, config: ScheduleConfig) -> Dict[str, Any]:
        """
        Generate a schedule for ``config``.

        Returns:
            The generated schedule as returned by the service.

        Raises:
            ScheduleServiceError: If the service call fails.
        """
        ...
