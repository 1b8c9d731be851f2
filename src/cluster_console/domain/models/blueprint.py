"""Blueprint topology and host group templates."""

from __future__ import annotations

from pydantic import Field

from cluster_console.domain.models.base import ValueObject


class Blueprint(ValueObject):
    """A named template declaring the components each host group runs."""

    blueprint_id: str
    host_groups: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def group_names(self) -> list[str]:
        return list(self.host_groups)


class HostGroupTemplate(ValueObject):
    """Initial host group -> host list mapping for a blueprint."""

    blueprint_id: str = ""
    groups: dict[str, list[str]] = Field(default_factory=dict)
