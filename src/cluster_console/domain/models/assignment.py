"""Session-scoped host to host group assignments."""

from __future__ import annotations

import copy

from pydantic import Field

from cluster_console.domain.models.base import DomainEntity
from cluster_console.domain.models.blueprint import HostGroupTemplate


class AssignmentStore(DomainEntity):
    """Hosts staged per host group before a cluster is created.

    The set of group names is fixed when the store is seeded from a
    template. Every host appended to a group must belong to ``host_names``.
    Repeated assignment of the same host is accepted as-is.
    """

    blueprint_id: str = ""
    host_groups: dict[str, list[str]] = Field(default_factory=dict)
    host_names: list[str] = Field(default_factory=list)

    @classmethod
    def from_template(
        cls, template: HostGroupTemplate, host_names: list[str]
    ) -> AssignmentStore:
        """Build a store keyed exactly by the template's groups."""
        return cls(
            blueprint_id=template.blueprint_id,
            host_groups={group: list(hosts) for group, hosts in template.groups.items()},
            host_names=list(host_names),
        )

    @property
    def groups(self) -> list[str]:
        return list(self.host_groups)

    def is_valid_group(self, group: str) -> bool:
        return group in self.host_groups

    def is_known_host(self, host: str) -> bool:
        return host in self.host_names

    def assign(self, host: str, group: str) -> None:
        """Append a host to a group, validating before any mutation."""
        if not self.is_valid_group(group):
            raise InvalidHostGroupError(group)
        if not self.is_known_host(host):
            raise UnknownHostError(host)
        self.host_groups[group].append(host)
        self.touch()

    def hosts_in(self, group: str) -> list[str]:
        return list(self.host_groups.get(group, []))

    def snapshot(self) -> dict[str, list[str]]:
        """Deep copy of the current assignments."""
        return copy.deepcopy(self.host_groups)


class AssignmentError(Exception):
    """Raised when an assignment is rejected."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidHostGroupError(AssignmentError):
    """Raised when the host group is not part of the selected blueprint."""

    def __init__(self, group: str) -> None:
        super().__init__(f"{group} is not a valid host group")
        self.group = group


class UnknownHostError(AssignmentError):
    """Raised when the host is not in the session's assignable pool."""

    def __init__(self, host: str) -> None:
        super().__init__(f"{host} is not a known host")
        self.host = host
