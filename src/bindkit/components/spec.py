"""
Component descriptors.

A component declares a set of artifacts so that they can be contributed to an
application as a group. Descriptors can be attached to a class with the
:func:`component` decorator::

    @component(
        controllers=[GreetingController],
        classes={"services.greeter": Greeter},
        providers={"greeting.text": GreetingTextProvider},
    )
    class GreetingComponent:
        ...
"""
import logging
from typing import Any, Callable, Optional, TypeVar

import pydantic

from ..context.binding import Binding
from ..metadata import MetadataKey, define_class_metadata, get_class_metadata

logger = logging.getLogger(__name__)

_C = TypeVar("_C", bound=type)


class ComponentSpec(pydantic.BaseModel):
    """
    Artifacts contributed by a component.

    Attributes:
        controllers: Controller classes, bound as ``controllers.<ClassName>``.
        providers: Provider classes by binding key; the key resolves to ``value()``.
        classes: Classes by binding key; the key resolves to a new instance.
        servers: Server classes by server name, bound as ``servers.<name>``.
        bindings: Prebuilt bindings, added as they are.
        extensions: Additional named properties. Not mounted.
    """
    model_config = pydantic.ConfigDict(
        arbitrary_types_allowed=True,
        extra="forbid",
    )

    controllers: list[Any] = pydantic.Field(default_factory=list)
    providers: dict[str, Any] = pydantic.Field(default_factory=dict)
    classes: dict[str, Any] = pydantic.Field(default_factory=dict)
    servers: dict[str, Any] = pydantic.Field(default_factory=dict)
    bindings: list[Binding] = pydantic.Field(default_factory=list)
    extensions: dict[str, Any] = pydantic.Field(default_factory=dict)


COMPONENT_KEY: MetadataKey[ComponentSpec] = MetadataKey("component")


def component(
        spec: Optional[ComponentSpec] = None,
        **fields: Any
) -> Callable[[_C], _C]:
    """
    Decorator attaching a component descriptor to a class.

    Accepts either a ready :class:`ComponentSpec` or its fields as keyword
    arguments. The class itself is returned unchanged.

    :param spec: The component descriptor.
    :param fields: Descriptor fields, used when ``spec`` is not given.
    :raises ValueError: If both ``spec`` and fields are given.
    :raises pydantic.ValidationError: If the fields do not describe a component.
    """
    if spec is not None and fields:
        raise ValueError("Pass either a ComponentSpec or its fields, not both")
    if spec is None:
        spec = ComponentSpec(**fields)

    def decorator(cls: _C) -> _C:
        define_class_metadata(COMPONENT_KEY, cls, spec)
        logger.debug("Declared component %s", cls.__qualname__)
        return cls

    return decorator


def component_spec(cls: Any) -> Optional[ComponentSpec]:
    """Get the descriptor attached to a component class, if any."""
    return get_class_metadata(COMPONENT_KEY, cls)
