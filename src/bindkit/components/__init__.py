from .mount import mount_component, mount_component_class
from .protocols import Component, Provider, Server
from .spec import COMPONENT_KEY, ComponentSpec, component, component_spec

__all__ = [
    "COMPONENT_KEY",
    "Component",
    "ComponentSpec",
    "Provider",
    "Server",
    "component",
    "component_spec",
    "mount_component",
    "mount_component_class",
]
