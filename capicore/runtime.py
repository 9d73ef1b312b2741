"""Runtime that finds factories for proxies and stubs and reads the configuration."""

from __future__ import annotations

import logging
import os
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional

from capicore.inifile import IniFileReader
from capicore.types import DEFAULT_SEND_TIMEOUT_MS

log = logging.getLogger(__name__)

DEFAULT_BINDING = "dbus"
DEFAULT_FOLDER = "/usr/local/lib/commonapi"
DEFAULT_CONFIG_FILE = "commonapi.ini"
DEFAULT_CONFIG_FOLDER = "/etc"

_properties: dict[str, str] = {}
_runtime: Optional["Runtime"] = None
_runtime_lock = threading.Lock()

LibraryLoader = Callable[["Runtime"], Optional[bool]]


def get_property(name: str) -> str:
    """Return a runtime property, or an empty string if it is not set."""
    return _properties.get(name, "")


def set_property(name: str, value: str) -> None:
    """Set a runtime property."""
    _properties[name] = value


def normalize_library_name(library: str) -> str:
    """Give ``library`` a shared-object suffix unless it already ends in one.

    A name ending in ``.so`` or ``.so`` followed by a version made of dots
    and digits is kept; anything else gets ``.so`` appended.
    """
    so_start = library.rfind(".so")
    if so_start == -1:
        return library + ".so"
    tail = library[so_start + 3:]
    if tail and any(c != "." and c not in "0123456789" for c in tail):
        return library + ".so"
    return library


class Factory(ABC):
    """Creates proxies and registers stubs for one binding.

    ``connection`` is either a connection id or a main loop context.
    """

    @abstractmethod
    def init(self) -> None:
        """Prepare the factory for use."""

    @abstractmethod
    def create_proxy(self, domain: str, interface: str, instance: str, connection: Any) -> Any:
        """Return a proxy for the address, or None if this factory cannot make one."""

    @abstractmethod
    def register_stub(
        self, domain: str, interface: str, instance: str, stub: Any, connection: Any
    ) -> bool:
        """Register ``stub`` at the address; return whether it succeeded."""

    @abstractmethod
    def unregister_stub(self, domain: str, interface: str, instance: str) -> bool:
        """Remove the stub at the address; return whether one was removed."""


@dataclass
class LoggingSettings:
    """Logging options read from the ``[logging]`` section."""

    console: bool = True
    file: str = ""
    dlt: bool = False
    level: str = "info"


class Runtime:
    """Keeps the registered factories and the configured library mappings."""

    def __init__(self) -> None:
        self.default_binding = DEFAULT_BINDING
        self.default_folder = DEFAULT_FOLDER
        self.default_config = ""
        self.used_config = ""
        self.default_call_timeout = DEFAULT_SEND_TIMEOUT_MS
        self.logging_settings = LoggingSettings()
        self.is_configured = False
        self.is_initialized = False
        self._default_factory: Optional[Factory] = None
        self._factories: dict[str, Factory] = {}
        self._libraries: dict[str, dict[bool, str]] = {}
        self._library_loaders: dict[str, LibraryLoader] = {}
        self._loaded_libraries: set[str] = set()
        self._lock = threading.Lock()
        self._factories_lock = threading.RLock()
        self._load_lock = threading.RLock()

    @property
    def default_factory(self) -> Optional[Factory]:
        """The factory of the default binding, if registered."""
        return self._default_factory

    @property
    def factories(self) -> dict[str, Factory]:
        """Factories of the other bindings, ordered by binding name."""
        return dict(sorted(self._factories.items()))

    def configure(self) -> None:
        """Read environment and configuration file, once."""
        with self._lock:
            if self.is_configured:
                return
            self.default_config = os.environ.get(
                "COMMONAPI_CONFIG", f"{DEFAULT_CONFIG_FOLDER}/{DEFAULT_CONFIG_FILE}"
            )
            self.read_configuration()
            binding = os.environ.get("COMMONAPI_DEFAULT_BINDING")
            if binding is not None:
                self.default_binding = binding
            folder = os.environ.get("COMMONAPI_DEFAULT_FOLDER")
            if folder is not None:
                self.default_folder = folder
            self.is_configured = True

    def read_configuration(self) -> bool:
        """Load the configuration file; return False if it exists but cannot be read.

        ``commonapi.ini`` in the working directory is preferred over the
        default configuration path. A malformed ``callTimeout`` raises
        :class:`ValueError`.
        """
        try_load = True
        try:
            cwd = os.getcwd()
        except OSError:
            cwd = None
        if cwd is not None:
            self.used_config = f"{cwd}/{DEFAULT_CONFIG_FILE}"
            if not os.path.exists(self.used_config):
                self.used_config = self.default_config
                if not os.path.exists(self.used_config):
                    try_load = False

        reader = IniFileReader()
        if try_load and not reader.load(self.used_config):
            return False

        settings = LoggingSettings()
        section = reader.get_section("logging")
        if section is not None:
            settings = LoggingSettings(
                console=section.get_value("console") == "true",
                file=section.get_value("file"),
                dlt=section.get_value("dlt") == "true",
                level=section.get_value("level"),
            )
        self.logging_settings = settings

        section = reader.get_section("default")
        if section is not None:
            binding = section.get_value("binding")
            if binding:
                self.default_binding = binding
            folder = section.get_value("folder")
            if folder:
                self.default_folder = folder
            call_timeout = section.get_value("callTimeout")
            if call_timeout:
                self.default_call_timeout = int(call_timeout)

        for name, is_proxy in (("proxy", True), ("stub", False)):
            section = reader.get_section(name)
            if section is None:
                continue
            for address, library in section.mappings.items():
                log.debug("Adding %s mapping: %s --> %s", name, address, library)
                self._libraries.setdefault(address, {})[is_proxy] = library
        return True

    def register_factory(self, binding: str, factory: Factory) -> bool:
        """Register ``factory`` for ``binding``.

        The default binding's factory is replaced; any other binding can be
        registered only once.
        """
        with self._factories_lock:
            registered = False
            if binding == self.default_binding:
                self._default_factory = factory
                registered = True
            elif binding not in self._factories:
                self._factories[binding] = factory
                registered = True
            if registered and self.is_initialized:
                factory.init()
            return registered

    def unregister_factory(self, binding: str) -> bool:
        """Remove the factory of ``binding``."""
        with self._factories_lock:
            if binding == self.default_binding:
                self._default_factory = None
            else:
                self._factories.pop(binding, None)
            return True

    def register_library(self, library: str, loader: LibraryLoader) -> None:
        """Make ``library`` loadable; ``loader`` is called with this runtime.

        The loader typically registers factories. Returning False reports
        that loading failed.
        """
        self._library_loaders[normalize_library_name(library)] = loader

    def _init_factories(self) -> None:
        with self._factories_lock:
            if self.is_initialized:
                return
            log.info("Loading configuration file '%s'", self.used_config)
            log.info("Using default binding '%s'", self.default_binding)
            log.info("Using default shared library folder '%s'", self.default_folder)
            if self._default_factory is not None:
                self._default_factory.init()
            for _, factory in sorted(self._factories.items()):
                factory.init()
            self.is_initialized = True

    def create_proxy(self, domain: str, interface: str, instance: str, connection: Any = "") -> Any:
        """Return a proxy for the address, or None if no factory makes one."""
        return self.create_dynamic_proxy(domain, interface, instance, instance, connection)

    def create_dynamic_proxy(
        self,
        domain: str,
        interface: str,
        template_instance: str,
        instance: str,
        connection: Any = "",
    ) -> Any:
        """Create a proxy, finding its library through ``template_instance``."""
        if not self.is_initialized:
            self._init_factories()
        proxy = self._create_proxy_helper(domain, interface, instance, connection, False)
        if proxy is None:
            with self._load_lock:
                library = self.get_library(domain, interface, template_instance, True)
                if self.load_library(library) or self._default_factory is not None:
                    proxy = self._create_proxy_helper(domain, interface, instance, connection, True)
        return proxy

    def register_stub(
        self, domain: str, interface: str, instance: str, stub: Any, connection: Any = ""
    ) -> bool:
        """Register ``stub`` at the address; return whether a factory took it."""
        return self.register_dynamic_stub(domain, interface, instance, instance, stub, connection)

    def register_dynamic_stub(
        self,
        domain: str,
        interface: str,
        template_instance: str,
        instance: str,
        stub: Any,
        connection: Any = "",
    ) -> bool:
        """Register a stub, finding its library through ``template_instance``."""
        if stub is None:
            return False
        if not self.is_initialized:
            self._init_factories()
        registered = self._register_stub_helper(domain, interface, instance, stub, connection, False)
        if not registered:
            library = self.get_library(domain, interface, template_instance, False)
            with self._load_lock:
                if self.load_library(library) or self._default_factory is not None:
                    registered = self._register_stub_helper(
                        domain, interface, instance, stub, connection, True
                    )
        return registered

    def unregister_stub(self, domain: str, interface: str, instance: str) -> bool:
        """Ask each factory, the default last, to remove the stub."""
        for _, factory in sorted(self._factories.items()):
            if factory.unregister_stub(domain, interface, instance):
                return True
        if self._default_factory is not None:
            return self._default_factory.unregister_stub(domain, interface, instance)
        return False

    def get_library(self, domain: str, interface: str, instance: str, is_proxy: bool) -> str:
        """Return the library name that serves the address."""
        address = f"{domain}:{interface}:{instance}"
        log.debug("Loading library for %s%s", address, " proxy." if is_proxy else " stub.")
        configured = self._libraries.get(address, {})
        if is_proxy in configured:
            return configured[is_proxy]
        base = get_property("LibraryBase")
        if base:
            return f"lib{base}-{self.default_binding}"
        return f"lib{domain}__{interface}__{instance}".replace(".", "_")

    def load_library(self, library: str) -> bool:
        """Load ``library`` once; return whether it is loaded."""
        name = normalize_library_name(library)
        if name in self._loaded_libraries:
            return True
        loader = self._library_loaders.get(name)
        if loader is None:
            log.debug('Loading interface library "%s" failed (not available)', name)
            return False
        if loader(self) is False:
            log.debug('Loading interface library "%s" failed', name)
            return False
        self._loaded_libraries.add(name)
        log.debug('Loading interface library "%s" succeeded.', name)
        return True

    def _create_proxy_helper(
        self, domain: str, interface: str, instance: str, connection: Any, use_default: bool
    ) -> Any:
        with self._factories_lock:
            for _, factory in sorted(self._factories.items()):
                proxy = factory.create_proxy(domain, interface, instance, connection)
                if proxy is not None:
                    return proxy
            if use_default and self._default_factory is not None:
                return self._default_factory.create_proxy(domain, interface, instance, connection)
            return None

    def _register_stub_helper(
        self,
        domain: str,
        interface: str,
        instance: str,
        stub: Any,
        connection: Any,
        use_default: bool,
    ) -> bool:
        with self._factories_lock:
            for _, factory in sorted(self._factories.items()):
                if factory.register_stub(domain, interface, instance, stub, connection):
                    return True
            if use_default and self._default_factory is not None:
                return bool(
                    self._default_factory.register_stub(domain, interface, instance, stub, connection)
                )
            return False


def get_runtime() -> Runtime:
    """Return the process-wide runtime, creating and configuring it on first use."""
    global _runtime
    with _runtime_lock:
        if _runtime is None:
            runtime = Runtime()
            runtime.configure()
            _runtime = runtime
        return _runtime


class ProxyManager:
    """Creates proxies through a runtime, the process-wide one by default."""

    def __init__(self, runtime: Optional[Runtime] = None):
        self._runtime = runtime

    def create_proxy(self, domain: str, interface: str, instance: str, connection: Any = "") -> Any:
        """Return a proxy for the address, or None."""
        runtime = self._runtime if self._runtime is not None else get_runtime()
        return runtime.create_proxy(domain, interface, instance, connection)