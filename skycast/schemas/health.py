from typing import Dict

from pydantic import BaseModel, Field

from skycast.definitions.data_sources import ServiceStatus


class HealthResponse(BaseModel):
    status: ServiceStatus = Field(..., description="Service health status")
    version: str = Field(..., description="API version")
    timestamp: str = Field(..., description="Current timestamp")
    services: Dict[str, str] = Field(..., description="Status of dependent services")
