"""Contains the base Function Set classes.

A function set is declared as a ``FunctionSet`` subclass with a
``NAMESPACE`` and a static ``FUNCTIONS`` table. The table is the whole
registration surface; methods are never discovered by inspection. For
example::

    class TargetFunctions(FunctionSet):
        \"\"\"Functions that query build targets.\"\"\"

        NAMESPACE = 'target'
        FUNCTIONS = (
            Function('exists', 'exists', params=(str,), returns=bool),
        )

        def exists(self, name):
            \"\"\"Checks whether the specified target exists.\"\"\"
            return self.project.targets.find(name) is not None

The set is registered by wrapping the class in a ``FunctionSetPlugin`` and
activating it (or by handing the plugin to ``FunctionRegistry.register``).
"""

import inspect
import logging
import re
from typing import Tuple

from yapsy import IPlugin

from buildfuncs import coercion
from buildfuncs.errors import FunctionSetError

LOGGER = logging.getLogger(__name__)

NAME_RE = re.compile(r'[a-z][a-z0-9-]*')


class Function:
    """One entry in a function set's FUNCTIONS table.

    :ivar str name: The function name as used in expressions
        (ie 'get-current-target').
    :ivar str method: The name of the FunctionSet method implementing it.
    :ivar tuple params: The declared parameter types, in order.
    :ivar type returns: The declared return type.
    :ivar bool deprecated: Deprecated functions still run, but the
        dispatcher warns about them.
    """

    def __init__(self, name: str, method: str, params: Tuple[type, ...] = (),
                 returns: type = str, deprecated: bool = False):
        self.name = name
        self.method = method
        self.params = tuple(params)
        self.returns = returns
        self.deprecated = deprecated


class FunctionDescriptor:
    """Static metadata for one registered function."""

    def __init__(self, namespace, name, method, param_types, return_type,
                 deprecated=False, description=''):
        self.namespace = namespace
        self.name = name
        self.method = method
        self.param_types = tuple(param_types)
        self.return_type = return_type
        self.deprecated = deprecated
        self.description = description

    @property
    def arity(self) -> int:
        return len(self.param_types)

    @property
    def key(self) -> Tuple[str, str, int]:
        """The identity of this function in the registry."""

        return self.namespace, self.name, self.arity

    @property
    def qualified_name(self) -> str:
        return '{}::{}'.format(self.namespace, self.name)

    def signature(self, arg_names=None) -> str:
        """Generate a function signature for this function, such as
        ``target::has-executed(name: str) -> bool``.

        :param arg_names: Names to give each argument. Positional names
            (arg1, arg2, ...) are used by default.
        """

        if arg_names is None:
            arg_names = ['arg{}'.format(i + 1)
                         for i in range(len(self.param_types))]

        args = ', '.join(
            '{}: {}'.format(arg_name, coercion.type_name(param_type))
            for arg_name, param_type in zip(arg_names, self.param_types))

        return '{}({}) -> {}'.format(
            self.qualified_name, args,
            coercion.type_name(self.return_type))

    def __eq__(self, other):
        if not isinstance(other, FunctionDescriptor):
            return False

        return (self.key == other.key
                and self.param_types == other.param_types
                and self.return_type == other.return_type
                and self.method == other.method
                and self.deprecated == other.deprecated)

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return '<FunctionDescriptor {}/{}>'.format(
            self.qualified_name, self.arity)


class FunctionSet:
    """Base class for function sets. An instance is bound to exactly one
    project context for its whole life, and is only ever used by the
    evaluation session that created it.

    Construction does no validation; each function checks its own
    preconditions when called.
    """

    NAMESPACE = None  # type: str
    FUNCTIONS = ()  # type: Tuple[Function, ...]

    def __init__(self, project, properties=None):
        """
        :param buildfuncs.context.ProjectContext project: The live project
            context.
        :param buildfuncs.context.PropertyDictionary properties: The live
            property dictionary. Defaults to the project's own.
        """

        self.project = project
        self._properties = properties

    @property
    def properties(self):
        """The property dictionary this set was given, or the project's."""

        if self._properties is not None:
            return self._properties

        return self.project.properties


class FunctionSetPlugin(IPlugin.IPlugin):
    """The registrant for one function set class. It validates the set's
    declarations and produces the descriptors the registry stores.

    Activating the plugin adds it to the default function registry.
    Function sets are never discovered or loaded by a yapsy PluginManager;
    the IPlugin base supplies only the activate/deactivate lifecycle and
    its is_activated flag.
    """

    def __init__(self, set_class, description=None):
        """
        :param type set_class: The FunctionSet subclass to register.
        :param str description: A short description of the set. The
            class docstring is used by default.
        :raises FunctionSetError: When the declaration is malformed.
        """

        if not (isinstance(set_class, type)
                and issubclass(set_class, FunctionSet)):
            raise FunctionSetError(
                "Function set '{}' must be a FunctionSet subclass."
                .format(set_class))

        namespace = set_class.NAMESPACE
        if (not isinstance(namespace, str)
                or not NAME_RE.fullmatch(namespace)):
            raise FunctionSetError(
                "Invalid namespace '{}' for function set {}. Namespaces "
                "must be lowercase identifiers."
                .format(namespace, set_class.__name__))

        self.namespace = namespace
        self.set_class = set_class

        if description is None:
            doc = set_class.__doc__
            if doc is None or doc == FunctionSet.__doc__:
                raise FunctionSetError(
                    "A function set description is required. Either add a "
                    "doc string to {}, or provide a description argument."
                    .format(set_class.__name__))
            description = ' '.join(doc.split())
        self.description = description

        self.descriptors = tuple(
            self._make_descriptor(func) for func in set_class.FUNCTIONS)

        super().__init__()

    def _make_descriptor(self, func: Function) -> FunctionDescriptor:
        """Validate one FUNCTIONS entry and turn it into a descriptor."""

        if (not isinstance(func.name, str)
                or not NAME_RE.fullmatch(func.name)):
            raise FunctionSetError(
                "Invalid function name '{}' in function set '{}'."
                .format(func.name, self.namespace))

        method = getattr(self.set_class, func.method, None)
        if method is None or not callable(method):
            raise FunctionSetError(
                "Function '{}::{}' refers to method '{}', which {} does "
                "not have."
                .format(self.namespace, func.name, func.method,
                        self.set_class.__name__))

        params = list(inspect.signature(method).parameters.values())
        # Instance methods looked up on the class still have 'self'.
        static = isinstance(
            inspect.getattr_static(self.set_class, func.method),
            (staticmethod, classmethod))
        if not static:
            params = params[1:]

        if len(params) != len(func.params):
            raise FunctionSetError(
                "Invalid parameter types for '{}::{}'. The method takes {} "
                "arguments, but {} parameter types were declared."
                .format(self.namespace, func.name, len(params),
                        len(func.params)))

        for param_type in func.params + (func.returns,):
            if not coercion.is_valid_type(param_type):
                raise FunctionSetError(
                    "Invalid type '{}' declared for '{}::{}'."
                    .format(param_type, self.namespace, func.name))

        doc = inspect.getdoc(method) or ''

        return FunctionDescriptor(
            namespace=self.namespace,
            name=func.name,
            method=func.method,
            param_types=func.params,
            return_type=func.returns,
            deprecated=func.deprecated,
            description=' '.join(doc.split()),
        )

    @property
    def path(self):
        """The path to the file containing this function set."""

        return inspect.getfile(self.set_class)

    def arg_names(self, descriptor: FunctionDescriptor):
        """The implementing method's argument names, for help output."""

        method = getattr(self.set_class, descriptor.method)
        names = list(inspect.signature(method).parameters.keys())
        return names[-descriptor.arity:] if descriptor.arity else []

    def bind(self, project, properties=None) -> FunctionSet:
        """Create an instance of the function set bound to the given
        project context."""

        return self.set_class(project, properties)

    def activate(self):
        """Yapsy runs this when adding the plugin. Add our function set
        to the default function registry."""

        from buildfuncs import registry

        registry.get_registry().register(self)
        super().activate()

    def deactivate(self):
        """Yapsy runs this when removing the plugin. Function sets will
        only be removed by unit tests."""

        from buildfuncs import registry

        registry.get_registry().unregister(self.namespace)
        super().deactivate()

    def __repr__(self):
        return '<FunctionSetPlugin {} ({})>'.format(
            self.namespace, self.set_class.__name__)
