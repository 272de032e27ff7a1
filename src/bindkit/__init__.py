"""
bindkit - component binding and mounting for dependency-injected applications.

This module provides a clean public surface for bindkit.
Consumers should import from here for stable API access.
"""

from .api import (
    # Application
    Application,
    ServerState,
    # Components
    Component,
    ComponentSpec,
    COMPONENT_KEY,
    Provider,
    Server,
    component,
    component_spec,
    mount_component,
    mount_component_class,
    # Context
    Binding,
    BindingScope,
    BindingType,
    Context,
    DuplicateBindingPolicy,
    inject,
    # Keys
    CoreBindings,
    CoreTags,
    component_key,
    controller_key,
    server_key,
    # Metadata
    MetadataKey,
    define_class_metadata,
    get_class_metadata,
    clear_class_metadata,
    # Config
    Settings,
    ApplicationSettings,
    LoggingSettings,
    load_file,
    load_settings,
    # Logging
    setup_logging,
    # Errors
    BindkitError,
    BindingNotFoundError,
    DuplicateBindingError,
    BindingResolutionError,
    AsyncValueError,
    CircularDependencyError,
    ServerLifecycleError,
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
