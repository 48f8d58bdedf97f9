"""
Class Discovery Module.

Finds the classes defined in a package so they can be verified in bulk.
Modules are imported (walking subpackages when the criteria ask for it)
and every class *defined* in them, as opposed to imported into them, is
filtered through a ``ClassCriteria`` policy.
"""

import enum
import importlib
import inspect
import logging
import pkgutil
from dataclasses import dataclass, field
from types import ModuleType

from beancheck.config.models import ClassCriteria
from beancheck.errors import InvalidArgument

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    """Result from class discovery.

    Attributes:
        classes: Matching classes, ordered by module then class name
        modules_scanned: Number of modules imported and inspected
        errors: Modules that failed to import, with the reason
    """

    classes: list[type] = field(default_factory=list)
    modules_scanned: int = 0
    errors: list[str] = field(default_factory=list)


class ClassDiscovery:
    """Discovers classes in a package according to a ClassCriteria policy.

    Usage:
        discovery = ClassDiscovery(ClassCriteria(name_pattern=".*Dto"))
        result = discovery.discover("myapp.dto")
        for cls in result.classes:
            ...
    """

    def __init__(self, criteria: ClassCriteria | None = None) -> None:
        self._criteria = criteria or ClassCriteria.create_default()

    @property
    def criteria(self) -> ClassCriteria:
        return self._criteria

    def discover(self, package: ModuleType | str) -> DiscoveryResult:
        """Discover matching classes in a package.

        Args:
            package: Imported module/package object or dotted name

        Returns:
            DiscoveryResult with matching classes

        Raises:
            InvalidArgument: If package is None
            ModuleNotFoundError: If a dotted name cannot be imported
        """
        if package is None:
            raise InvalidArgument("Input package is null")

        root = importlib.import_module(package) if isinstance(package, str) else package
        if not isinstance(root, ModuleType):
            raise InvalidArgument(f"Expected a module or package name, got {package!r}")

        result = DiscoveryResult()
        for module in self._iter_modules(root, result):
            result.modules_scanned += 1
            result.classes.extend(self._classes_in(module))

        logger.info(
            f"Discovered {len(result.classes)} classes in {result.modules_scanned} modules "
            f"of {root.__name__}, {len(result.errors)} errors"
        )
        return result

    def _iter_modules(self, root: ModuleType, result: DiscoveryResult):
        yield root

        # Plain modules have no __path__ and nothing to walk
        search_path = getattr(root, "__path__", None)
        if search_path is None:
            return

        def on_walk_error(name: str) -> None:
            result.errors.append(f"Error walking {name}")

        prefix = f"{root.__name__}."
        walker = (
            pkgutil.walk_packages(search_path, prefix, onerror=on_walk_error)
            if self._criteria.recursive
            else pkgutil.iter_modules(search_path, prefix)
        )
        for info in sorted(walker, key=lambda i: i.name):
            try:
                yield importlib.import_module(info.name)
            except Exception as e:
                error_msg = f"Error importing {info.name}: {e}"
                result.errors.append(error_msg)
                logger.warning(error_msg)

    def _classes_in(self, module: ModuleType) -> list[type]:
        members = inspect.getmembers(module, inspect.isclass)
        return [
            cls
            for name, cls in members
            if cls.__module__ == module.__name__ and self.matches(cls)
        ]

    def matches(self, cls: type) -> bool:
        """Check a class against the discovery criteria."""
        criteria = self._criteria
        if not criteria.matches_name(cls.__name__):
            return False
        if not criteria.include_abstract and inspect.isabstract(cls):
            return False
        if not criteria.include_enums and issubclass(cls, enum.Enum):
            return False
        if not criteria.include_exceptions and issubclass(cls, BaseException):
            return False
        if criteria.required_marker and not getattr(cls, criteria.required_marker, False):
            return False
        return True


def find_classes(
    package: ModuleType | str,
    criteria: ClassCriteria | None = None,
) -> list[type]:
    """Find classes in a package matching the criteria.

    Args:
        package: Module object or dotted package name
        criteria: Matching policy (defaults to ClassCriteria.create_default())

    Returns:
        Matching classes ordered by module then name
    """
    return ClassDiscovery(criteria).discover(package).classes
