"""Function sets group the built-in functions available to build script
expressions under a namespace (``project::get-name()``,
``target::exists('clean')``, ...).
"""

from typing import Iterable

from buildfuncs import registry as _registry
from .base import Function, FunctionDescriptor, FunctionSet, FunctionSetPlugin
from .core import (AssemblyFunctions, NAntFunctions, PlatformFunctions,
                   ProjectFunctions, PropertyFunctions, TargetFunctions,
                   TaskFunctions)

# The function sets registered at start up.
CORE_FUNCTION_SETS = (
    NAntFunctions,
    ProjectFunctions,
    TargetFunctions,
    TaskFunctions,
    PropertyFunctions,
    PlatformFunctions,
    AssemblyFunctions,
)


def register_core_sets(registry: _registry.FunctionRegistry = None,
                       disabled: Iterable[str] = ()):
    """Register each of the core function sets. Sets that are already
    registered are left alone, so this is safe to call more than once.

    :param registry: The registry to add to. When not given, the sets are
        activated as plugins in the default registry.
    :param disabled: Namespaces not to register.
    :raises DuplicateNamespaceError: If a different function set already
        holds one of the core namespaces.
    """

    disabled = set(disabled)
    target = registry if registry is not None else _registry.get_registry()

    for set_class in CORE_FUNCTION_SETS:
        if set_class.NAMESPACE in disabled:
            continue

        if (set_class.NAMESPACE in target
                and target.get_set(set_class.NAMESPACE).set_class
                is set_class):
            continue

        plugin = FunctionSetPlugin(set_class)
        if registry is None:
            plugin.activate()
        else:
            registry.register(plugin)


def get_set(namespace: str) -> FunctionSetPlugin:
    """Get the function set plugin for the given namespace from the default
    registry."""

    return _registry.get_registry().get_set(namespace)


def list_sets():
    """Return the namespaces in the default registry."""

    return _registry.get_registry().namespaces()
