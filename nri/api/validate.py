"""Validation of container adjustments by validator plugins."""

from __future__ import annotations

from dataclasses import dataclass, field

from nri.api.adjustment import ContainerAdjustment
from nri.api.container import Container, PodSandbox
from nri.api.owners import OwningPlugins
from nri.api.update import ContainerUpdate


class ValidationRejected(Exception):
    """A validator rejected a container adjustment."""

    def __init__(self, plugin: str, reason: str) -> None:
        self.plugin = plugin
        self.reason = reason
        super().__init__(
            f'validator "{plugin}" rejected container adjustment, reason: {reason}'
        )


@dataclass
class PluginInstance:
    """A plugin identified by its name and index."""

    name: str = ""
    index: str = ""


@dataclass
class CreateContainerResponse:
    """A plugin's response to container creation."""

    adjust: ContainerAdjustment | None = None
    update: list[ContainerUpdate] = field(default_factory=list)


@dataclass
class ValidateContainerAdjustmentRequest:
    """A request to validate the adjustments made to a container."""

    pod: PodSandbox | None = None
    container: Container | None = None
    adjust: ContainerAdjustment | None = None
    update: list[ContainerUpdate] = field(default_factory=list)
    owners: OwningPlugins | None = None
    plugins: list[PluginInstance] = field(default_factory=list)

    def add_plugin(self, name: str, index: str) -> None:
        """Record a plugin that took part in the adjustment."""
        self.plugins.append(PluginInstance(name=name, index=index))

    def add_response(self, response: CreateContainerResponse) -> None:
        """Take the adjustment and updates from a creation response."""
        self.adjust = response.adjust
        self.update = response.update

    def add_owners(self, owners: OwningPlugins) -> None:
        """Record the owners of the adjusted fields."""
        self.owners = owners

    def plugin_map(self) -> dict[str, PluginInstance]:
        """Return the plugins by bare name and by 'index-name'."""
        plugins: dict[str, PluginInstance] = {}
        for p in self.plugins:
            plugins[p.name] = PluginInstance(name=p.name)
            plugins[f"{p.index}-{p.name}"] = p
        return plugins


@dataclass
class ValidateContainerAdjustmentResponse:
    """A validator's verdict on a container adjustment."""

    reject: bool = False
    reason: str = ""

    def validation_result(self, plugin: str) -> None:
        """Raise ValidationRejected if the validator rejected the adjustment."""
        if not self.reject:
            return
        raise ValidationRejected(plugin, self.reason or "unknown rejection reason")