"""The project context is the view of an in-progress build that function sets
read from. The build engine owns and mutates it (running targets, setting
properties); function implementations only ever read it.

The collections here are deliberately small. Property storage semantics,
target scheduling and task loading belong to the build engine. These classes
only hold what the built-in functions need to answer questions about them."""

import contextlib
import enum
import os
import sys
from pathlib import Path
from typing import Iterator, List, Union


class PlatformKind(enum.Enum):
    """The broad families of host platform."""

    WIN32 = 'win32'
    UNIX = 'unix'
    OTHER = 'other'


class Platform:
    """The identity of the host platform.

    :ivar str name: The platform name, as reported by ``sys.platform``.
    :ivar PlatformKind kind: The platform family.
    """

    def __init__(self, name: str, kind: PlatformKind):
        self.name = name
        self.kind = kind

    @classmethod
    def detect(cls) -> 'Platform':
        """Figure out which platform we're running on."""

        if sys.platform == 'win32':
            kind = PlatformKind.WIN32
        elif os.name == 'posix':
            kind = PlatformKind.UNIX
        else:
            kind = PlatformKind.OTHER

        return cls(sys.platform, kind)

    @property
    def is_win32(self) -> bool:
        return self.kind is PlatformKind.WIN32

    @property
    def is_unix(self) -> bool:
        return self.kind is PlatformKind.UNIX

    def __repr__(self):
        return '<Platform {} ({})>'.format(self.name, self.kind.value)


class Assembly:
    """The identity of a loaded library module that provides tasks (or the
    function library itself). Functions hand these back as opaque values
    that other functions may consume.

    :ivar str name: The library name.
    :ivar str version: The library version string.
    :ivar Union[Path,None] location: Where the library was loaded from, if
        it was loaded from a file.
    """

    def __init__(self, name: str, version: str = '0.0.0',
                 location: Union[Path, str, None] = None):
        self.name = name
        self.version = version
        self.location = Path(location) if location is not None else None

    @property
    def full_name(self) -> str:
        """The name and version of the library as one string."""

        return '{}, Version={}'.format(self.name, self.version)

    def __eq__(self, other):
        if not isinstance(other, Assembly):
            return False

        return ((self.name, self.version, self.location)
                == (other.name, other.version, other.location))

    def __hash__(self):
        return hash((self.name, self.version, self.location))

    def __repr__(self):
        return '<Assembly {}>'.format(self.full_name)


class Target:
    """A build target, as far as functions are concerned.

    :ivar str name: The target name.
    :ivar bool executed: Whether the target has already run in this build.
    """

    def __init__(self, name: str):
        self.name = name
        self.executed = False

    def __repr__(self):
        return '<Target {} executed={}>'.format(self.name, self.executed)


class TargetCollection:
    """The targets defined by the project, by name."""

    def __init__(self, targets=None):
        self.data = {}

        for target in targets or []:
            self.add(target)

    def add(self, target: Union[Target, str]) -> Target:
        """Add a target (or a target name) to the collection."""

        if isinstance(target, str):
            target = Target(target)

        self.data[target.name] = target
        return target

    def find(self, name: str) -> Union[Target, None]:
        """Return the target called name, or None if there isn't one."""

        return self.data.get(name)

    def __contains__(self, name):
        return name in self.data

    def __getitem__(self, name) -> Target:
        if name not in self.data:
            raise KeyError(
                "No target named '{}'. Available targets are: {}"
                .format(name, tuple(self.data.keys())))
        return self.data[name]

    def __iter__(self) -> Iterator[Target]:
        return iter(self.data.values())

    def __len__(self):
        return len(self.data)


class Property:
    """A single build property and its flags."""

    def __init__(self, name: str, value: str, read_only: bool = False,
                 dynamic: bool = False):
        self.name = name
        self.value = value
        self.read_only = read_only
        self.dynamic = dynamic

    def __repr__(self):
        return '<Property {}={!r} ro={} dyn={}>'.format(
            self.name, self.value, self.read_only, self.dynamic)


class PropertyDictionary:
    """The build's properties, by name. Each one is flagged read-only and/or
    dynamic by whoever sets it."""

    def __init__(self):
        self.data = {}

    def set(self, name: str, value: str, read_only: bool = False,
            dynamic: bool = False) -> Property:
        """Set (or replace) the named property."""

        prop = Property(name, value, read_only=read_only, dynamic=dynamic)
        self.data[name] = prop
        return prop

    def remove(self, name: str):
        """Unset the named property. Missing properties are ignored."""

        self.data.pop(name, None)

    def __contains__(self, name):
        return name in self.data

    def __getitem__(self, name) -> Property:
        if name not in self.data:
            raise KeyError("Property '{}' has not been set.".format(name))
        return self.data[name]

    def __iter__(self):
        return iter(self.data)

    def __len__(self):
        return len(self.data)


class TaskBuilder:
    """Knows how to create one kind of task, and where it came from.

    :ivar str name: The task name, as used in build files.
    :ivar Assembly assembly: The library the task was loaded from.
    :ivar str class_name: The name of the class implementing the task.
    """

    def __init__(self, name: str, assembly: Assembly, class_name: str = ''):
        self.name = name
        self.assembly = assembly
        self.class_name = class_name

    def __repr__(self):
        return '<TaskBuilder {} from {}>'.format(self.name, self.assembly.name)


class TaskBuilderCollection:
    """The available task builders, by task name."""

    def __init__(self, builders=None):
        self.data = {}

        for builder in builders or []:
            self.add(builder)

    def add(self, builder: TaskBuilder) -> TaskBuilder:
        self.data[builder.name] = builder
        return builder

    def find(self, name: str) -> Union[TaskBuilder, None]:
        """Return the task builder for the named task, or None."""

        return self.data.get(name)

    def __contains__(self, name):
        return name in self.data

    def __iter__(self) -> Iterator[TaskBuilder]:
        return iter(self.data.values())

    def __len__(self):
        return len(self.data)


class ProjectContext:
    """The state of a single build run, as seen by function sets.

    Function sets keep a reference to this object rather than a copy of
    anything in it, so they always see the build as it currently is.
    Reads are unlocked; only one expression is evaluated at a time per
    build run.

    :ivar str name: The project name (may be empty).
    :ivar Union[Path,None] build_file: The build file, when the project is
        file backed.
    :ivar str default_target: The default target name (may be empty).
    :ivar Path base_dir: The project base directory.
    :ivar Union[Target,None] current_target: The target currently executing.
    :ivar TargetCollection targets:
    :ivar PropertyDictionary properties:
    :ivar TaskBuilderCollection task_builders:
    :ivar Platform platform: The host platform.
    :ivar List[Path] probing_paths: Directories to search for framework
        provided files, in search order.
    """

    def __init__(self, base_dir: Union[Path, str], name: str = '',
                 build_file: Union[Path, str, None] = None,
                 default_target: str = '', platform: Platform = None,
                 probing_paths: List[Union[Path, str]] = None):

        self.base_dir = Path(base_dir)
        self.name = name
        self.build_file = Path(build_file) if build_file is not None else None
        self.default_target = default_target
        self.platform = platform if platform is not None else Platform.detect()
        self.probing_paths = [Path(path) for path in probing_paths or []]

        self.current_target = None  # type: Union[Target, None]
        self.targets = TargetCollection()
        self.properties = PropertyDictionary()
        self.task_builders = TaskBuilderCollection()

    @classmethod
    def from_config(cls, config, base_dir: Union[Path, str],
                    **kwargs) -> 'ProjectContext':
        """Create a project context that uses the probing paths from the
        given buildfuncs configuration.

        :param buildfuncs.config.FuncConfig config:
        :param base_dir: The project base directory.
        :param kwargs: Passed on to the constructor.
        """

        return cls(base_dir, probing_paths=config.probing_paths, **kwargs)

    @property
    def build_file_uri(self) -> str:
        """The build file as a file URI, or an empty string if the project
        isn't file backed."""

        if self.build_file is None:
            return ''

        return self.build_file.resolve().as_uri()

    @property
    def build_file_path(self) -> str:
        """The local path of the build file, or an empty string."""

        if self.build_file is None:
            return ''

        return str(self.build_file)

    @contextlib.contextmanager
    def executing(self, target_name: str):
        """Mark the named target as the current target for the duration of
        the context, then mark it as executed. Targets nest; the previous
        current target is restored afterwards."""

        target = self.targets[target_name]
        previous = self.current_target
        self.current_target = target
        try:
            yield target
        finally:
            target.executed = True
            self.current_target = previous
