"""Well-known binding keys, tags and the naming conventions for artifacts."""
from typing import Any, Optional, Union


class CoreBindings:
    APPLICATION_INSTANCE = "application.instance"
    APPLICATION_CONFIG = "application.config"
    APPLICATION_LOGGER = "application.logger"

    CONTROLLERS = "controllers"
    COMPONENTS = "components"
    SERVERS = "servers"


class CoreTags:
    CONTROLLER = "controller"
    COMPONENT = "component"
    SERVER = "server"


def artifact_name(target: Union[type, str, Any], name: Optional[str] = None) -> str:
    """
    Get the name an artifact is registered under.

    :param target: The artifact class, or an already chosen name.
    :param name: Explicit name. Takes precedence over the class name.
    :return: The explicit name, else the class ``__name__``.
    """
    if name:
        return name
    if isinstance(target, str):
        return target
    return getattr(target, "__name__", type(target).__name__)


def _namespaced(namespace: str, target, name: Optional[str]) -> str:
    return f"{namespace}.{artifact_name(target, name)}"


def controller_key(ctor, name: Optional[str] = None) -> str:
    return _namespaced(CoreBindings.CONTROLLERS, ctor, name)


def component_key(ctor, name: Optional[str] = None) -> str:
    return _namespaced(CoreBindings.COMPONENTS, ctor, name)


def server_key(ctor, name: Optional[str] = None) -> str:
    return _namespaced(CoreBindings.SERVERS, ctor, name)
