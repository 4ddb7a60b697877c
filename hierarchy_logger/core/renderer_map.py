"""
Object renderers

Messages that are not strings are turned into text by a renderer chosen
from the runtime type of the message.
"""

import importlib
import pprint
import traceback
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from hierarchy_logger.core.diagnostics import warn


class Renderer(ABC):
    """Converts an object to its textual representation."""

    @abstractmethod
    def render(self, obj: Any) -> str:
        pass


class DefaultRenderer(Renderer):
    """Pretty-prints any value."""

    def render(self, obj: Any) -> str:
        return pprint.pformat(obj)


class ExceptionRenderer(Renderer):
    """Renders exceptions as ``ClassName: message`` plus the traceback."""

    def render(self, obj: Any) -> str:
        lines = traceback.format_exception(type(obj), obj, obj.__traceback__)
        return "".join(lines).rstrip("\n")


def import_object(path: str) -> Any:
    """
    Import an object from ``package.module:Name`` or ``package.module.Name``.

    Raises:
        ImportError: If the module or attribute cannot be found
    """
    if ":" in path:
        module_name, _, attr = path.partition(":")
    else:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ImportError(f"Invalid import path [{path}]")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError:
        raise ImportError(f"Module [{module_name}] has no attribute [{attr}]") from None


class RendererMap:
    """
    Registry of renderers keyed by class.

    Lookup walks the MRO of the message type, so a renderer registered for
    a base class also renders its subclasses.
    """

    def __init__(self):
        self._map: Dict[type, Renderer] = {}
        self._default: Renderer = DefaultRenderer()
        self.reset()

    def add_renderer(self, rendered_class: Union[type, str], renderer: Union[Renderer, type, str]) -> bool:
        """
        Register a renderer for a class.

        Args:
            rendered_class: Class (or import path) to render
            renderer: Renderer instance, Renderer subclass or import path

        Returns:
            True if the renderer was registered
        """
        if isinstance(rendered_class, str):
            try:
                rendered_class = import_object(rendered_class)
            except ImportError:
                warn("RendererMap", f"Failed adding renderer. Rendered class [{rendered_class}] not found.")
                return False
        if not isinstance(rendered_class, type):
            warn("RendererMap", f"Failed adding renderer. [{rendered_class!r}] is not a class.")
            return False

        instance = self._resolve_renderer(renderer)
        if instance is None:
            return False
        self._map[rendered_class] = instance
        return True

    def set_default_renderer(self, renderer: Union[Renderer, type, str]) -> bool:
        """Replace the renderer used when no class-specific one matches."""
        instance = self._resolve_renderer(renderer)
        if instance is None:
            return False
        self._default = instance
        return True

    def get_default_renderer(self) -> Renderer:
        return self._default

    def get_by_class(self, cls: type) -> Optional[Renderer]:
        for klass in cls.__mro__:
            renderer = self._map.get(klass)
            if renderer is not None:
                return renderer
        return None

    def get_by_object(self, obj: Any) -> Optional[Renderer]:
        if obj is None:
            return None
        return self.get_by_class(type(obj))

    def find_and_render(self, obj: Any) -> Optional[str]:
        """
        Render an object with the best matching renderer.

        Never raises: a failing renderer falls back to the default renderer,
        and a failing default renderer to the type name.
        """
        if obj is None:
            return None

        renderers = [self.get_by_object(obj) or self._default]
        if renderers[0] is not self._default:
            renderers.append(self._default)
        for renderer in renderers:
            try:
                return renderer.render(obj)
            except Exception as e:
                warn("RendererMap", f"Renderer [{type(renderer).__name__}] failed: {e}")
        return f"<{type(obj).__name__} object>"

    def clear(self) -> None:
        """Remove all class-specific renderers."""
        self._map.clear()

    def reset(self) -> None:
        """Restore the initial registrations."""
        self._map.clear()
        self._default = DefaultRenderer()
        self._map[BaseException] = ExceptionRenderer()

    def _resolve_renderer(self, renderer: Union[Renderer, type, str]) -> Optional[Renderer]:
        if isinstance(renderer, str):
            try:
                renderer = import_object(renderer)
            except ImportError:
                warn("RendererMap", f"Failed adding renderer. Rendering class [{renderer}] not found.")
                return None
        if isinstance(renderer, type):
            if not issubclass(renderer, Renderer):
                warn(
                    "RendererMap",
                    f"Failed adding renderer. Rendering class [{renderer.__name__}] "
                    "does not implement the Renderer interface.",
                )
                return None
            renderer = renderer()
        if not isinstance(renderer, Renderer):
            warn("RendererMap", f"Failed adding renderer. [{renderer!r}] is not a Renderer.")
            return None
        return renderer

    def __len__(self) -> int:
        return len(self._map)
