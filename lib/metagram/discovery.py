"""
Handler source discovery.

Scans a package and yields every class marked as handler source. The result
is meant to be passed to :meth:`HandlerRegistry.registerHandlerSourcesFrom`.
"""

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Iterator, List

from .decorators import isHandlerSource

logger = logging.getLogger(__name__)


def _iterModules(packageName: str) -> Iterator[ModuleType]:
    package = importlib.import_module(packageName)
    yield package

    packagePath = getattr(package, "__path__", None)
    if packagePath is None:
        # Plain module, nothing to walk
        return

    names: List[str] = sorted(
        moduleInfo.name for moduleInfo in pkgutil.walk_packages(packagePath, prefix=f"{package.__name__}.")
    )
    for name in names:
        yield importlib.import_module(name)


def discoverHandlerSources(packageName: str) -> Iterator[type]:
    """Yield handler source classes defined in a package and its submodules.

    Classes are yielded ordered by module name, then by definition order.
    Classes imported from other modules are skipped so every class is
    yielded once.

    Args:
        packageName: Dotted name of the package (or module) to scan

    Yields:
        Handler source classes

    Raises:
        ImportError: If package or one of its submodules can not be imported
    """
    for module in _iterModules(packageName):
        classes = [
            obj
            for obj in vars(module).values()
            if inspect.isclass(obj) and obj.__module__ == module.__name__ and isHandlerSource(obj)
        ]
        for cls in classes:
            logger.debug(f"Discovered handler source {cls.__module__}.{cls.__qualname__}")
            yield cls
