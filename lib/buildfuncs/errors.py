"""This module holds the buildfuncs exception classes, mainly to prevent
cyclic import problems.

Function implementations raise the ``FunctionError`` subclasses below. The
dispatcher never lets those (or anything else an implementation raises)
reach the expression evaluator directly; they are translated into a
``CallFailure`` first."""

import enum
import pprint
import shutil
import textwrap
import traceback


class ErrorKind(enum.Enum):
    """The kinds of failure a function call can report."""

    UNKNOWN_NAMESPACE = 'UnknownNamespace'
    UNKNOWN_FUNCTION = 'UnknownFunction'
    ARGUMENT_TYPE_MISMATCH = 'ArgumentTypeMismatch'
    INVALID_STATE = 'InvalidState'
    UNKNOWN_TARGET = 'UnknownTarget'
    UNKNOWN_TASK = 'UnknownTask'
    UNKNOWN_PROPERTY = 'UnknownProperty'
    FILE_NOT_FOUND = 'FileNotFound'
    # The implementation raised something that isn't a FunctionError.
    INVOCATION_FAILED = 'InvocationFailed'

    def __str__(self):
        return self.value


class BuildFuncsError(RuntimeError):
    """Base class for all buildfuncs errors."""

    TAB_LEVEL = '  '

    def __init__(self, msg, prior_error=None, data=None):
        """These take a new message and whatever prior error caused the problem.

        :param msg: The error message.
        :param prior_error: The exception object that triggered this exception.
        :param data: Any relevant data that needs to be passed to the user.
        """

        self._msg = msg
        self.prior_error = prior_error
        self.data = data
        super().__init__(msg)

    @property
    def msg(self):
        """Just return msg. This exists to be overridden in order to allow for
        dynamically generated messages."""

        return self._msg

    def __reduce__(self):
        return type(self), (self.msg, self.prior_error, self.data)

    def __str__(self):
        if self.prior_error:
            return '{}: {}'.format(self.msg, str(self.prior_error))
        else:
            return self.msg

    def pformat(self, show_traceback: bool = False) -> str:
        """Specially format the exception for printing. Each prior error is
        printed on its own, further indented, line."""

        if show_traceback:
            return ''.join(traceback.format_exception(
                type(self), self, self.__traceback__))

        lines = []
        next_exc = self.prior_error
        width = shutil.get_terminal_size((80, 80)).columns
        tab_level = 0
        for line in str(self.msg).split('\n'):
            lines.extend(textwrap.wrap(line, width=width))

        if self.data:
            data = pprint.pformat(self.data, width=width)
            lines.extend(data.split('\n'))

        while next_exc:
            tab_level += 1
            indent = tab_level * self.TAB_LEVEL
            if isinstance(next_exc, BuildFuncsError):
                for msg_part in str(next_exc.msg).split('\n'):
                    lines.extend(textwrap.wrap(
                        msg_part, width, initial_indent=indent,
                        subsequent_indent=indent + self.TAB_LEVEL))
                if next_exc.data:
                    data = pprint.pformat(next_exc.data,
                                          width=width - tab_level*2)
                    for line in data.split('\n'):
                        lines.append(indent + line)

                next_exc = next_exc.prior_error
            else:
                if (isinstance(next_exc.args, (list, tuple))
                        and next_exc.args
                        and isinstance(next_exc.args[0], str)):
                    msg = next_exc.args[0]
                else:
                    msg = str(next_exc)

                for msg_part in str(msg).split('\n'):
                    lines.extend(textwrap.wrap(msg_part, width,
                                               initial_indent=indent,
                                               subsequent_indent=indent))
                break

        return '\n'.join(lines)

    def __eq__(self, other):
        """Check that all values are the same."""

        if not isinstance(other, self.__class__):
            return False

        for key, value in self.__dict__.items():
            if not hasattr(other, key):
                return False

            other_value = getattr(other, key)
            if isinstance(value, Exception):
                # Exceptions don't compare by value, so compare what they say.
                if (type(value) is not type(other_value)
                        or value.args != other_value.args):
                    return False
            elif value != other_value:
                return False

        return True

    __hash__ = RuntimeError.__hash__


class ConfigError(BuildFuncsError):
    """Raised when the buildfuncs configuration can't be found or loaded."""


class RegistrationError(BuildFuncsError):
    """Base class for problems registering a function set."""


class DuplicateNamespaceError(RegistrationError):
    """A function set is already registered under the namespace."""


class DuplicateSignatureError(RegistrationError):
    """Two functions in one set share the same name and arity."""


class FunctionSetError(RegistrationError):
    """A function set declaration is malformed."""


class FunctionError(BuildFuncsError):
    """Base class for errors raised while resolving or running a function.
    Each subclass corresponds to one ErrorKind."""

    kind = ErrorKind.INVOCATION_FAILED


class UnknownNamespaceError(FunctionError):
    """No function set is registered under the namespace."""

    kind = ErrorKind.UNKNOWN_NAMESPACE


class UnknownFunctionError(FunctionError):
    """The namespace exists, but has no function with that name and arity."""

    kind = ErrorKind.UNKNOWN_FUNCTION


class ArgumentTypeMismatchError(FunctionError):
    """An argument can't be coerced to the declared parameter type."""

    kind = ErrorKind.ARGUMENT_TYPE_MISMATCH


class InvalidStateError(FunctionError):
    """The build isn't in a state where the function can answer."""

    kind = ErrorKind.INVALID_STATE


class UnknownTargetError(FunctionError):
    """The named target does not exist."""

    kind = ErrorKind.UNKNOWN_TARGET


class UnknownTaskError(FunctionError):
    """The named task is not available."""

    kind = ErrorKind.UNKNOWN_TASK


class UnknownPropertyError(FunctionError):
    """The named property has not been set."""

    kind = ErrorKind.UNKNOWN_PROPERTY


class ProbeFileNotFoundError(FunctionError):
    """A file could not be found in any of the search locations."""

    kind = ErrorKind.FILE_NOT_FOUND


class FunctionInvocationError(FunctionError):
    """Wraps an unexpected exception raised by a function implementation."""

    kind = ErrorKind.INVOCATION_FAILED


class CallFailure:
    """The single failure shape handed back to the expression evaluator.

    :ivar str namespace: The namespace of the failed call.
    :ivar str function: The function name of the failed call.
    :ivar ErrorKind kind: What went wrong.
    :ivar str message: A message that names the fully qualified function
        and its arguments, so a script author can find the expression.
    :ivar tuple arguments: The argument values as given to the call.
    """

    def __init__(self, namespace, function, kind, message, arguments=()):
        self.namespace = namespace
        self.function = function
        self.kind = kind
        self.message = message
        self.arguments = tuple(arguments)

    @classmethod
    def from_error(cls, namespace, function, arguments,
                   error: BuildFuncsError) -> 'CallFailure':
        """Create a failure for the given call from a function error."""

        kind = getattr(error, 'kind', ErrorKind.INVOCATION_FAILED)
        message = "{}::{}({}): {}".format(
            namespace, function,
            ', '.join(repr(arg) for arg in arguments),
            error.msg)

        return cls(namespace, function, kind, message, arguments)

    @property
    def qualified_name(self):
        """The 'namespace::function' name of the failed call."""

        return '{}::{}'.format(self.namespace, self.function)

    def __str__(self):
        return self.message

    def __repr__(self):
        return '<CallFailure {} {}>'.format(self.kind.value, self.message)

    def __eq__(self, other):
        if not isinstance(other, CallFailure):
            return False

        return (self.namespace, self.function, self.kind, self.message,
                self.arguments) == (other.namespace, other.function,
                                    other.kind, other.message,
                                    other.arguments)

    def __reduce__(self):
        return type(self), (self.namespace, self.function, self.kind,
                            self.message, self.arguments)


class FunctionCallError(BuildFuncsError):
    """Raised to evaluators that prefer exceptions. Carries the CallFailure
    of the failed call."""

    def __init__(self, failure: CallFailure, prior_error=None, data=None):
        self.failure = failure
        super().__init__(failure.message, prior_error=prior_error, data=data)

    @property
    def kind(self) -> ErrorKind:
        """The kind of the wrapped failure."""

        return self.failure.kind

    def __reduce__(self):
        return type(self), (self.failure, self.prior_error, self.data)
