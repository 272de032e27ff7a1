import asyncio
import logging
import weakref
from enum import Enum
from typing import Any, Iterable, Optional, Union

from .components.mount import mount_component
from .components.protocols import Server
from .config.models import ApplicationSettings
from .config.setup import application_logger_name
from .context.binding import Binding, BindingScope
from .context.context import Context
from .errors import ServerLifecycleError
from .keys import CoreBindings, CoreTags, component_key, controller_key, server_key

logger = logging.getLogger(__name__)


class ServerState(Enum):
    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    LISTENING = "listening"
    STOPPED = "stopped"


class Application(Context):
    """
    Application context.

    Registers controllers, components and servers under conventional keys and
    tags, and drives the lifecycle of every binding tagged ``server``.
    """

    def __init__(
            self,
            settings: Optional[ApplicationSettings] = None,
            *,
            parent: Optional[Context] = None
    ) -> None:
        settings = settings if settings is not None else ApplicationSettings()
        super().__init__(
            name=settings.name,
            parent=parent,
            duplicate_policy=settings.duplicate_bindings
        )
        self.settings = settings
        self._server_states: "weakref.WeakKeyDictionary[Binding, ServerState]" = weakref.WeakKeyDictionary()

        self.bind(CoreBindings.APPLICATION_INSTANCE).to(self)
        self.bind(CoreBindings.APPLICATION_CONFIG).to(settings)
        self.bind(CoreBindings.APPLICATION_LOGGER).to(
            logging.getLogger(application_logger_name(settings.name))
        )
        logger.debug("Created application '%s'", self.name)

    def controller(self, controller_ctor: type, name: Optional[str] = None) -> Binding:
        """
        Register a controller class.

        :param controller_ctor: The controller class.
        :param name: Optional name; defaults to the class name.
        :return: The binding, keyed ``controllers.<name>`` and tagged ``controller``.
        """
        key = controller_key(controller_ctor, name)
        logger.debug("Adding controller %s as '%s'", controller_ctor, key)
        binding = Binding(key).to_class(controller_ctor).tag(CoreTags.CONTROLLER)
        self.add(binding)
        return binding

    def component(self, component_ctor: type, name: Optional[str] = None) -> None:
        """
        Register a component class and mount the artifacts it declares.

        The component is bound as a singleton under ``components.<name>`` with
        the ``component`` tag, instantiated with constructor injection, then
        mounted.

        :param component_ctor: The component class.
        :param name: Optional name; defaults to the class name.
        """
        key = component_key(component_ctor, name)
        logger.debug("Adding component %s as '%s'", component_ctor, key)
        binding = (
            Binding(key)
            .to_class(component_ctor)
            .in_scope(BindingScope.SINGLETON)
            .tag(CoreTags.COMPONENT)
        )
        self.add(binding)

        instance = self.get_sync(key)
        mount_component(self, instance)

    def mount(self, component_inst: Any) -> None:
        """Mount an already constructed component object or mapping."""
        mount_component(self, component_inst)

    def server(self, server_ctor: type, name: Optional[str] = None) -> Binding:
        """
        Register a server class.

        :param server_ctor: The server class.
        :param name: Optional name; defaults to the class name.
        :return: The binding, keyed ``servers.<name>`` and tagged ``server``.
        """
        key = server_key(server_ctor, name)
        logger.debug("Adding server %s as '%s'", server_ctor, key)
        binding = (
            Binding(key)
            .to_class(server_ctor)
            .in_scope(BindingScope.SINGLETON)
            .tag(CoreTags.SERVER)
        )
        self.add(binding)
        return binding

    def servers(self, server_ctors: Iterable[type]) -> list[Binding]:
        """Register several server classes under their class names."""
        return [self.server(server_ctor) for server_ctor in server_ctors]

    async def get_server(self, target: Union[type, str]) -> Server:
        """
        Resolve a registered server.

        :param target: The server name or class.
        :raises BindingNotFoundError: If no such server is registered.
        """
        return await self.get(server_key(target))

    def server_state(self, target: Union[type, str]) -> ServerState:
        """
        Get the lifecycle state of a server.

        :param target: The server name or class, or the key of any binding
                       tagged ``server``.
        :return: ``UNREGISTERED`` unless a binding tagged ``server`` is bound
                 under that key.
        """
        servers = {binding.key: binding for binding in self.find_by_tag(CoreTags.SERVER)}
        binding = servers.get(target) if isinstance(target, str) else None
        if binding is None:
            binding = servers.get(server_key(target))
        if binding is None:
            return ServerState.UNREGISTERED
        return self._server_states.get(binding, ServerState.REGISTERED)

    async def start(self) -> None:
        """
        Start every server bound with the ``server`` tag.

        :raises ExceptionGroup: Of :class:`ServerLifecycleError`, after every
                                server was attempted, if any of them failed.
        """
        logger.info("Starting application '%s'", self.name)
        await self._for_each_server("start", ServerState.LISTENING)

    async def stop(self) -> None:
        """
        Stop every server bound with the ``server`` tag.

        :raises ExceptionGroup: Of :class:`ServerLifecycleError`, after every
                                server was attempted, if any of them failed.
        """
        logger.info("Stopping application '%s'", self.name)
        await self._for_each_server("stop", ServerState.STOPPED)

    async def _for_each_server(self, phase: str, next_state: ServerState) -> None:
        bindings = self.find_by_tag(CoreTags.SERVER)
        if not bindings:
            logger.debug("No servers to %s", phase)
            return

        async def _run(binding: Binding) -> None:
            try:
                server = await self.get(binding.key)
                await getattr(server, phase)()
            except asyncio.CancelledError as e:
                task = asyncio.current_task()
                if task is not None and task.cancelling():
                    raise
                # raised by the server itself, not a cancellation of this task
                logger.error("Server '%s' was cancelled during %s", binding.key, phase)
                raise ServerLifecycleError(binding.key, phase) from e
            except Exception as e:
                logger.error("Server '%s' failed to %s: %s", binding.key, phase, e)
                raise ServerLifecycleError(binding.key, phase) from e
            self._server_states[binding] = next_state
            logger.debug("Server '%s' is %s", binding.key, next_state.value)

        if self.settings.start_concurrently:
            _ret = await asyncio.gather(
                *map(_run, bindings),
                return_exceptions=True
            )
        else:
            _ret = []
            for binding in bindings:
                try:
                    _ret.append(await _run(binding))
                except ServerLifecycleError as e:
                    _ret.append(e)

        _exceptions = [_exc for _exc in _ret if isinstance(_exc, BaseException)]

        if _exceptions:
            raise BaseExceptionGroup(
                f"{len(_exceptions)} of {len(bindings)} server(s) failed to {phase}.",
                _exceptions
            )
