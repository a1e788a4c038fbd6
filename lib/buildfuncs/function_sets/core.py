"""Contains the core function sets in a single module to speed loading.

These answer questions about the running build: the project, its targets,
tasks and properties, the host platform, and the function library itself.
Existence checks return False rather than failing; asking about the flags
or state of something that doesn't exist is an error."""

from pathlib import Path

import buildfuncs
from buildfuncs import probing
from buildfuncs.context import Assembly
from buildfuncs.errors import (InvalidStateError, ProbeFileNotFoundError,
                               UnknownPropertyError, UnknownTargetError,
                               UnknownTaskError)
from .base import Function, FunctionSet

LIBRARY_DIR = Path(buildfuncs.__file__).resolve().parent


class NAntFunctions(FunctionSet):
    """Functions about the function library itself and the framework files
    it can find."""

    NAMESPACE = 'nant'
    FUNCTIONS = (
        Function('get-base-directory', 'get_base_directory'),
        Function('get-assembly', 'get_assembly', returns=Assembly),
        Function('scan-probing-paths', 'scan_probing_paths', params=(str,)),
    )

    @staticmethod
    def get_base_directory():
        """Gets the directory the function library was loaded from."""

        return str(LIBRARY_DIR)

    @staticmethod
    def get_assembly():
        """Gets the identity of the function library."""

        return Assembly(buildfuncs.__name__, buildfuncs.__version__,
                        LIBRARY_DIR)

    def scan_probing_paths(self, file_name):
        """Searches the configured probing paths for the given file (name
        including the extension), returning its absolute path. The paths
        are scanned recursively in the order they were configured."""

        lib_path = probing.resolve_file(self.project.probing_paths,
                                        file_name, recursive=True)
        if lib_path is None:
            raise ProbeFileNotFoundError(
                "'{}' could not be found in any of the configured probing "
                "paths.".format(file_name))

        return str(lib_path)


class ProjectFunctions(FunctionSet):
    """Functions that describe the current project."""

    NAMESPACE = 'project'
    FUNCTIONS = (
        Function('get-name', 'get_name'),
        Function('get-buildfile-uri', 'get_buildfile_uri'),
        Function('get-buildfile-path', 'get_buildfile_path'),
        Function('get-default-target', 'get_default_target'),
        Function('get-base-directory', 'get_base_directory'),
    )

    def get_name(self):
        """Gets the name of the current project, or an empty string if no
        name is given in the build file."""

        return self.project.name or ''

    def get_buildfile_uri(self):
        """Gets the URI form of the build file, or an empty string if the
        project is not file backed."""

        return self.project.build_file_uri

    def get_buildfile_path(self):
        """Gets the local path to the build file, or an empty string if the
        project is not file backed."""

        return self.project.build_file_path

    def get_default_target(self):
        """Gets the name of the target that runs when no other targets are
        specified, or an empty string if there is no default target."""

        return self.project.default_target or ''

    def get_base_directory(self):
        """Gets the base directory of the current project."""

        return str(self.project.base_dir)


class TargetFunctions(FunctionSet):
    """Functions that query the project's targets."""

    NAMESPACE = 'target'
    FUNCTIONS = (
        Function('exists', 'exists', params=(str,), returns=bool),
        Function('get-current-target', 'get_current_target'),
        Function('has-executed', 'has_executed', params=(str,), returns=bool),
    )

    def exists(self, name):
        """Checks whether the specified target exists."""

        return self.project.targets.find(name) is not None

    def get_current_target(self):
        """Gets the name of the target being executed."""

        target = self.project.current_target
        if target is None:
            raise InvalidStateError("No target is being executed.")

        return target.name

    def has_executed(self, name):
        """Checks whether the specified target has already been executed."""

        target = self.project.targets.find(name)
        if target is None:
            raise UnknownTargetError(
                "Target '{}' does not exist.".format(name))

        return target.executed


class TaskFunctions(FunctionSet):
    """Functions that query the available tasks."""

    NAMESPACE = 'task'
    FUNCTIONS = (
        Function('exists', 'exists', params=(str,), returns=bool),
        Function('get-assembly', 'get_assembly', params=(str,),
                 returns=Assembly),
    )

    def exists(self, name):
        """Checks whether the specified task exists."""

        return name in self.project.task_builders

    def get_assembly(self, name):
        """Returns the assembly from which the specified task was loaded."""

        builder = self.project.task_builders.find(name)
        if builder is None:
            raise UnknownTaskError(
                "Task '{}' is not available.".format(name))

        return builder.assembly


class PropertyFunctions(FunctionSet):
    """Functions that query build properties."""

    NAMESPACE = 'property'
    FUNCTIONS = (
        Function('exists', 'exists', params=(str,), returns=bool),
        Function('get-value', 'get_value', params=(str,)),
        Function('is-readonly', 'is_readonly', params=(str,), returns=bool),
        Function('is-dynamic', 'is_dynamic', params=(str,), returns=bool),
    )

    def _get(self, name):
        if name not in self.properties:
            raise UnknownPropertyError(
                "Property '{}' has not been set.".format(name))

        return self.properties[name]

    def exists(self, name):
        """Checks whether the specified property exists."""

        return name in self.properties

    def get_value(self, name):
        """Gets the value of the specified property."""

        return self._get(name).value

    def is_readonly(self, name):
        """Checks whether the specified property is read-only."""

        return self._get(name).read_only

    def is_dynamic(self, name):
        """Checks whether the specified property is a dynamic property."""

        return self._get(name).dynamic


class PlatformFunctions(FunctionSet):
    """Functions that describe the host platform."""

    NAMESPACE = 'platform'
    FUNCTIONS = (
        Function('get-name', 'get_name'),
        Function('is-win32', 'is_win32', returns=bool),
        Function('is-unix', 'is_unix', returns=bool),
    )

    def get_name(self):
        """Gets the name of the platform the build is running on."""

        return self.project.platform.name

    def is_win32(self):
        """Checks whether the build is running on the win32 platform."""

        return self.project.platform.is_win32

    def is_unix(self):
        """Checks whether the build is running on unix."""

        return self.project.platform.is_unix


class AssemblyFunctions(FunctionSet):
    """Functions that describe assemblies returned by other functions, such
    as task::get-assembly."""

    NAMESPACE = 'assembly'
    FUNCTIONS = (
        Function('get-full-name', 'get_full_name', params=(Assembly,)),
        Function('get-name', 'get_name', params=(Assembly,)),
        Function('get-version', 'get_version', params=(Assembly,)),
        Function('get-location', 'get_location', params=(Assembly,)),
    )

    @staticmethod
    def get_full_name(assembly):
        """Gets the full name (name and version) of the assembly."""

        return assembly.full_name

    @staticmethod
    def get_name(assembly):
        """Gets the simple name of the assembly."""

        return assembly.name

    @staticmethod
    def get_version(assembly):
        """Gets the version of the assembly."""

        return assembly.version

    @staticmethod
    def get_location(assembly):
        """Gets the path the assembly was loaded from, or an empty string if
        it wasn't loaded from a file."""

        if assembly.location is None:
            return ''

        return str(assembly.location)
