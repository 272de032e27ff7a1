"""
Mounting of components into an application.

Mounting translates the artifacts a component declares into bindings. The
descriptor attached to the component's class is mounted first, then the
component's own fields, in this order:

    classes, providers, bindings, controllers, servers

so that later artifacts may depend on ones bound earlier in the same pass, and
so that a component's own fields win over its class descriptor when keys collide
in a registry that overwrites duplicates.
"""
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .spec import COMPONENT_KEY
from ..context.binding import Binding
from ..metadata import get_class_metadata

if TYPE_CHECKING:
    from ..application import Application

logger = logging.getLogger(__name__)


def _field(component_inst: Any, name: str) -> Any:
    if isinstance(component_inst, Mapping):
        value = component_inst.get(name)
    else:
        value = getattr(component_inst, name, None)
    return value or ()


def _describe(component_inst: Any) -> str:
    return type(component_inst).__qualname__


def mount_component(app: "Application", component_inst: Any) -> None:
    """
    Mount a component to an application.

    :param app: The application receiving the bindings.
    :param component_inst: The component: an object or mapping exposing any of
                           ``classes``, ``providers``, ``bindings``,
                           ``controllers`` and ``servers``.
    """
    logger.debug("Mounting component %s", _describe(component_inst))

    mount_component_class(app, type(component_inst))

    classes = _field(component_inst, "classes")
    for class_key in classes:
        app.add(Binding(class_key).to_class(classes[class_key]))

    providers = _field(component_inst, "providers")
    for provider_key in providers:
        app.add(Binding(provider_key).to_provider(providers[provider_key]))

    for binding in _field(component_inst, "bindings"):
        app.add(binding)

    for controller_ctor in _field(component_inst, "controllers"):
        app.controller(controller_ctor)

    servers = _field(component_inst, "servers")
    for server_name in servers:
        app.server(servers[server_name], server_name)

    logger.debug("Mounted component %s", _describe(component_inst))


def mount_component_class(app: "Application", cls: Any) -> None:
    """
    Mount the descriptor attached to a component class, if any.

    The class is not instantiated. Values that are not classes are skipped.

    :param app: The application receiving the bindings.
    :param cls: The component class.
    """
    decorated = get_class_metadata(COMPONENT_KEY, cls)
    if decorated is not None:
        logger.debug("Mounting descriptor declared on %s", cls.__qualname__)
        mount_component(app, decorated)
