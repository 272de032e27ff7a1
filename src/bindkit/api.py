"""
Public API for bindkit.

This module exports all public interfaces for consumers to use.
Import only from this module for stable API access.
"""

from .application import Application, ServerState
from .components.mount import mount_component, mount_component_class
from .components.protocols import Component, Provider, Server
from .components.spec import COMPONENT_KEY, ComponentSpec, component, component_spec
from .config.base import Settings
from .config.loaders import load_file, load_settings
from .config.models import ApplicationSettings, LoggingSettings
from .config.setup import setup_logging
from .context.binding import Binding, BindingScope, BindingType
from .context.context import Context, DuplicateBindingPolicy
from .context.inject import inject
from .errors import (
    AsyncValueError,
    BindingNotFoundError,
    BindingResolutionError,
    BindkitError,
    CircularDependencyError,
    DuplicateBindingError,
    ServerLifecycleError,
)
from .keys import CoreBindings, CoreTags, component_key, controller_key, server_key
from .metadata import (
    MetadataKey,
    clear_class_metadata,
    define_class_metadata,
    get_class_metadata,
)

__all__ = [
    # Application
    "Application",
    "ServerState",
    # Components
    "Component",
    "ComponentSpec",
    "COMPONENT_KEY",
    "Provider",
    "Server",
    "component",
    "component_spec",
    "mount_component",
    "mount_component_class",
    # Context
    "Binding",
    "BindingScope",
    "BindingType",
    "Context",
    "DuplicateBindingPolicy",
    "inject",
    # Keys
    "CoreBindings",
    "CoreTags",
    "component_key",
    "controller_key",
    "server_key",
    # Metadata
    "MetadataKey",
    "define_class_metadata",
    "get_class_metadata",
    "clear_class_metadata",
    # Config
    "Settings",
    "ApplicationSettings",
    "LoggingSettings",
    "load_file",
    "load_settings",
    # Logging
    "setup_logging",
    # Errors
    "BindkitError",
    "BindingNotFoundError",
    "DuplicateBindingError",
    "BindingResolutionError",
    "AsyncValueError",
    "CircularDependencyError",
    "ServerLifecycleError",
]
