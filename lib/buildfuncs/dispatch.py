"""The dispatcher turns call descriptors from the expression evaluator into
function invocations against the live project context.

A ``Dispatcher`` is one evaluation session: it is created for a build run,
creates each namespace's function set the first time it's needed, and
throws them all away with itself. Calls run synchronously, in the order
they are given.
"""

import logging
from typing import Iterable, List, Sequence

from buildfuncs import coercion
from buildfuncs import registry as registry_mod
from buildfuncs.errors import (ArgumentTypeMismatchError, CallFailure,
                               FunctionCallError, FunctionError,
                               FunctionInvocationError)

LOGGER = logging.getLogger(__name__)


class CallDescriptor:
    """A single function call, as produced by the expression parser.

    :ivar str namespace: The function namespace ('target').
    :ivar str function: The function name ('has-executed').
    :ivar tuple args: The already evaluated argument values, in order.
    """

    def __init__(self, namespace: str, function: str, args: Sequence = ()):
        self.namespace = namespace
        self.function = function
        self.args = tuple(args)

    @property
    def qualified_name(self) -> str:
        return '{}::{}'.format(self.namespace, self.function)

    def __str__(self):
        return '{}({})'.format(self.qualified_name,
                               ', '.join(repr(arg) for arg in self.args))

    def __repr__(self):
        return '<CallDescriptor {}>'.format(self)


class CallResult:
    """The outcome of one call: either a value or a failure.

    An empty string is a perfectly good value (many functions use it to say
    'not applicable'); only ``failure`` signals that the call failed.
    """

    def __init__(self, value=None, failure: CallFailure = None):
        self.value = value
        self.failure = failure

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self):
        """Return the value, or raise a FunctionCallError for a failure."""

        if self.failure is not None:
            raise FunctionCallError(self.failure)

        return self.value

    def __repr__(self):
        if self.ok:
            return '<CallResult value={!r}>'.format(self.value)
        return '<CallResult failure={!r}>'.format(self.failure)


class Dispatcher:
    """Resolves, coerces and invokes function calls for one evaluation
    session."""

    def __init__(self, project, registry: registry_mod.FunctionRegistry = None,
                 properties=None):
        """
        :param buildfuncs.context.ProjectContext project: The live project
            context. Function sets read it directly; nothing is copied.
        :param registry: The function registry to resolve calls against.
            Defaults to the process default registry.
        :param buildfuncs.context.PropertyDictionary properties: A property
            dictionary to give function sets in place of the project's.
        """

        self.project = project
        self.properties = properties
        self.registry = (registry if registry is not None
                         else registry_mod.get_registry())

        # namespace -> bound FunctionSet
        self._sets = {}

    def get_function_set(self, namespace: str):
        """Return this session's function set for namespace, creating it
        on first use.

        :raises UnknownNamespaceError:
        """

        func_set = self._sets.get(namespace)
        if func_set is None:
            plugin = self.registry.get_set(namespace)
            func_set = plugin.bind(self.project, self.properties)
            self._sets[namespace] = func_set

        return func_set

    def invoke(self, call: CallDescriptor) -> CallResult:
        """Invoke the function described by call. Failures of any sort come
        back as a CallResult carrying a CallFailure; they are never raised.
        """

        LOGGER.debug("Invoking %s", call)

        try:
            value = self._invoke(call)
        except FunctionError as err:
            failure = CallFailure.from_error(
                call.namespace, call.function, call.args, err)
            LOGGER.info("Function call failed (%s): %s",
                        failure.kind, failure.message)
            if err.prior_error is not None:
                LOGGER.debug("Underlying error for %s", call,
                             exc_info=err.prior_error)
            return CallResult(failure=failure)

        return CallResult(value=value)

    def call(self, call: CallDescriptor):
        """Invoke the function described by call and return its value.

        :raises FunctionCallError: When the call fails.
        """

        return self.invoke(call).unwrap()

    def call_all(self, calls: Iterable[CallDescriptor]) -> List:
        """Invoke each call in order, returning their values. Evaluation
        stops at the first failure; later calls are never made.

        :raises FunctionCallError: For the first call that fails.
        """

        return [self.call(call) for call in calls]

    def _invoke(self, call: CallDescriptor):
        """Resolve, coerce and run the call. Raises FunctionErrors."""

        descriptor = self.registry.resolve(
            call.namespace, call.function, len(call.args))

        args = self._coerce_args(descriptor, call.args)

        try:
            func_set = self.get_function_set(call.namespace)
        except FunctionError:
            raise
        except Exception as err:
            raise FunctionInvocationError(
                "Could not create the '{}' function set: {}"
                .format(call.namespace, err), prior_error=err)

        method = getattr(func_set, descriptor.method)

        if descriptor.deprecated:
            LOGGER.warning("Function '%s' is deprecated.",
                           descriptor.qualified_name)

        try:
            return method(*args)
        except FunctionError:
            raise
        except Exception as err:
            raise FunctionInvocationError(
                "Function call failed: {}".format(err), prior_error=err)

    @staticmethod
    def _coerce_args(descriptor, args) -> list:
        """Convert each argument to its declared parameter type."""

        coerced = []
        for i, (arg, param_type) in enumerate(
                zip(args, descriptor.param_types)):
            try:
                coerced.append(coercion.coerce(arg, param_type))
            except ArgumentTypeMismatchError as err:
                raise ArgumentTypeMismatchError(
                    "Invalid argument {} ({!r}): {}"
                    .format(i + 1, arg, err.msg))

        return coerced
