"""The function registry maps namespaces to function set plugins, and
(namespace, name, arity) keys to function descriptors.

A process-wide default registry backs plugin activation, but registries are
plain objects and tests (or embedding build engines) can create isolated
ones."""

import logging
from typing import Iterator

from buildfuncs.errors import (DuplicateNamespaceError,
                               DuplicateSignatureError,
                               UnknownFunctionError, UnknownNamespaceError)

LOGGER = logging.getLogger(__name__)


class FunctionRegistry:
    """A catalog of function sets. Resolution is deterministic and depends
    only on what is currently registered."""

    def __init__(self):
        # namespace -> FunctionSetPlugin
        self._sets = {}
        # (namespace, name, arity) -> FunctionDescriptor
        self._functions = {}

    def register(self, func_set):
        """Add a function set plugin to the registry. Nothing is registered
        if the set is rejected.

        :param buildfuncs.function_sets.FunctionSetPlugin func_set:
        :raises DuplicateNamespaceError: When the namespace already has a
            function set.
        :raises DuplicateSignatureError: When two functions in the set share
            the same name and arity.
        """

        namespace = func_set.namespace

        if namespace in self._sets:
            other = self._sets[namespace]
            raise DuplicateNamespaceError(
                "Function set conflict. Namespace '{}' from '{}' is already "
                "registered by the function set at '{}'."
                .format(namespace, func_set.path, other.path))

        functions = {}
        for descriptor in func_set.descriptors:
            if descriptor.key in functions:
                raise DuplicateSignatureError(
                    "Function set '{}' declares '{}' with {} arguments more "
                    "than once."
                    .format(namespace, descriptor.qualified_name,
                            descriptor.arity))
            functions[descriptor.key] = descriptor

        self._sets[namespace] = func_set
        self._functions.update(functions)

        LOGGER.info("Registered function set '%s' (%d functions) from %s.",
                    namespace, len(functions), func_set.path)

    def unregister(self, namespace: str):
        """Remove the function set registered under namespace.

        :raises UnknownNamespaceError: If there isn't one.
        """

        if namespace not in self._sets:
            raise UnknownNamespaceError(
                "No function set registered for namespace '{}'."
                .format(namespace))

        del self._sets[namespace]
        for key in [key for key in self._functions if key[0] == namespace]:
            del self._functions[key]

        LOGGER.info("Unregistered function set '%s'.", namespace)

    def resolve(self, namespace: str, name: str, argc: int):
        """Find the descriptor for a function call.

        A known function called with the wrong number of arguments is
        reported exactly like a function that doesn't exist.

        :rtype: buildfuncs.function_sets.FunctionDescriptor
        :raises UnknownNamespaceError:
        :raises UnknownFunctionError:
        """

        if namespace not in self._sets:
            raise UnknownNamespaceError(
                "Unknown function namespace '{}'.".format(namespace))

        descriptor = self._functions.get((namespace, name, argc))
        if descriptor is None:
            raise UnknownFunctionError(
                "Unknown function '{}::{}/{}'.".format(namespace, name, argc))

        return descriptor

    def get_set(self, namespace: str):
        """Return the function set plugin for the given namespace.

        :rtype: buildfuncs.function_sets.FunctionSetPlugin
        :raises UnknownNamespaceError:
        """

        if namespace not in self._sets:
            raise UnknownNamespaceError(
                "Unknown function namespace '{}'.".format(namespace))

        return self._sets[namespace]

    def namespaces(self):
        """The registered namespaces. This is a live view; it can be
        iterated over as many times as needed."""

        return self._sets.keys()

    def functions(self, namespace: str = None) -> Iterator:
        """Iterate over the registered function descriptors (optionally of
        just one namespace), sorted by name and arity."""

        keys = sorted(key for key in self._functions
                      if namespace is None or key[0] == namespace)
        for key in keys:
            yield self._functions[key]

    def __contains__(self, namespace):
        return namespace in self._sets

    def __len__(self):
        return len(self._sets)


_REGISTRY = FunctionRegistry()


def get_registry() -> FunctionRegistry:
    """Return the process default function registry."""

    return _REGISTRY


def _reset():
    """Reset the default registry. For testing only."""

    for namespace in list(_REGISTRY.namespaces()):
        plugin = _REGISTRY.get_set(namespace)
        if plugin.is_activated:
            plugin.deactivate()
        else:
            _REGISTRY.unregister(namespace)
