from typing import Literal

from pydantic import ConfigDict

from statusboard.schemas.base import CamelModel

ServiceGroupKey = Literal["core", "api", "frontend", "infrastructure"]


class ServiceConfig(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    health_url: str
    group: ServiceGroupKey


class ServiceGroup(CamelModel):
    key: ServiceGroupKey
    name: str
    order: int
    services: list[ServiceConfig]


class ServiceGroupsResponse(CamelModel):
    groups: list[ServiceGroup]
