"""Inventory data models based on Pydantic."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

HostPreference = Literal["name", "ansible_host"]

DEFAULT_PORTS: dict[str, int] = {
    "rdp": 3389,
    "ssh": 22,
    "sftp": 22,
    "ftp": 21,
}


class InventoryHost(BaseModel):
    """Representation of a single inventory host line."""

    name: str = Field(description="Inventory hostname (FQDN, short name or IP literal).")

    # Standard Ansible variables
    ansible_host: str | None = None
    ansible_connection: str | None = None
    ansible_port: int | None = None
    ansible_user: str | None = None
    ansible_winrm_transport: str | None = None
    ansible_winrm_cert_validation: str | None = None

    # Application variables (remote_mgr_* on the wire)
    ext_connection_type: str | None = None
    ext_credential_id: str | None = None
    ext_credential_strategy: str | None = None
    ext_domain: str | None = None
    ext_port: int | None = None
    ext_display_name: str | None = None
    ext_identity_file: str | None = None
    ext_proxy_jump: str | None = None
    ext_tags: list[str] = Field(default_factory=list)

    comment: str | None = None
    inline_comment: str | None = Field(
        default=None,
        description="Trailing '# ...' text after the host entry, including the '#'.",
    )
    raw_variables: dict[str, str] = Field(
        default_factory=dict,
        description="Every other variable, value text kept exactly as written.",
    )
    line_number: int | None = None


class InventoryGroup(BaseModel):
    """A named group together with its children and :vars section."""

    name: str
    hosts: list[InventoryHost] = Field(default_factory=list)
    children: list[str] = Field(default_factory=list, description="Child group names.")
    vars: dict[str, str] = Field(default_factory=dict)
    comments: list[str] = Field(default_factory=list)


class Inventory(BaseModel):
    """Parsed contents of one inventory file."""

    groups: list[InventoryGroup] = Field(default_factory=list)
    ungrouped_hosts: list[InventoryHost] = Field(default_factory=list)
    header_comments: list[str] = Field(default_factory=list)
    ungrouped_comments: list[str] = Field(
        default_factory=list,
        description="Comments after the header block that precede any group header.",
    )

    def find_group(self, name: str) -> InventoryGroup | None:
        for group in self.groups:
            if group.name == name:
                return group
        return None

    def resolve_children(self, group: InventoryGroup) -> list[InventoryGroup]:
        """Look up the child groups of ``group``; unknown names are skipped."""
        resolved = []
        for child_name in group.children:
            child = self.find_group(child_name)
            if child is not None:
                resolved.append(child)
        return resolved

    def all_hosts(self) -> list[InventoryHost]:
        hosts = list(self.ungrouped_hosts)
        for group in self.groups:
            hosts.extend(group.hosts)
        return hosts

    def find_host(self, name: str) -> InventoryHost | None:
        for host in self.all_hosts():
            if host.name == name:
                return host
        return None

    def host_count(self) -> int:
        return len(self.ungrouped_hosts) + sum(len(group.hosts) for group in self.groups)


def display_label(host: InventoryHost) -> str:
    """Label shown for a host: display name, then comment, then name."""
    return host.ext_display_name or host.comment or host.name


def connection_host(host: InventoryHost, preference: HostPreference = "name") -> str:
    if preference == "ansible_host":
        return host.ansible_host or host.name
    return host.name


def detect_connection_type(host: InventoryHost) -> str:
    """Detect the user-facing connection type from the host variables."""
    if host.ext_connection_type:
        return host.ext_connection_type
    # WinRM means Windows, which users reach over RDP
    if host.ansible_connection == "winrm":
        return "rdp"
    return "ssh"


def connection_port(host: InventoryHost, connection_type: str | None = None) -> int:
    """
    Port for a user-facing connection.

    ``ansible_port`` is the automation port (5985 for WinRM), so it is only
    reused for SSH/SFTP connections.
    """
    if host.ext_port:
        return host.ext_port

    conn_type = connection_type or detect_connection_type(host)
    if conn_type == "rdp" and host.ansible_connection == "winrm":
        return DEFAULT_PORTS["rdp"]
    if conn_type in ("ssh", "sftp") and host.ansible_port:
        return host.ansible_port
    return DEFAULT_PORTS.get(conn_type, 22)
