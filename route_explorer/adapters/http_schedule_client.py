"""
HTTP Schedule Client - forwards schedule configurations to the generator.

The payload is the validated ScheduleConfig, serialized unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from route_explorer.adapters.http_base import JsonHttpClient
from route_explorer.config import ApiConfig, ExplorerConfig
from route_explorer.exceptions import ScheduleServiceError
from route_explorer.ports.schedule_service import ScheduleService
from route_explorer.schemas.schedule import ScheduleConfig


class HttpScheduleClient(JsonHttpClient, ScheduleService):
    """Schedule generation service client."""

    _error_cls = ScheduleServiceError
    _service_name = "Schedule service"

    def __init__(
        self,
        base_url: Optional[str] = None,
        config: Optional[ApiConfig] = None,
    ) -> None:
        config = config or ExplorerConfig.api
        super().__init__(base_url or config.schedule_url, config)

    async def validate_config(self, config: ScheduleConfig) -> Dict[str, Any]:
        return await self._request_json(
            "POST", "/validate", json=config.model_dump(exclude_none=True)
        )

    async def generate(self, config: ScheduleConfig) -> Dict[str, Any]:
        return await self._request_json(
            "POST", "/generate", json=config.model_dump(exclude_none=True)
        )
