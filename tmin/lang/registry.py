from __future__ import annotations

import importlib
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Type

from .base import Language
from ..errors import UnknownComponentError

__all__ = [
    "register_lazy",
    "get_language",
    "language_for_path",
    "list_languages",
]


@dataclass(frozen=True)
class _LazySpec:
    module: str
    class_name: str
    name: str
    extensions: Tuple[str, ...]


# Lazy specs: name → where the class lives
_LAZY_BY_NAME: Dict[str, _LazySpec] = {}
# ext → language name
_NAME_BY_EXT: Dict[str, str] = {}
# Resolved classes
_CLASS_BY_NAME: Dict[str, Type[Language]] = {}


def register_lazy(*, module: str, class_name: str, name: str, extensions: List[str] | Tuple[str, ...]) -> None:
    """
    Register a language by strings, without importing its module.
    The grammar package is imported on first request only.
    """
    spec = _LazySpec(module=module, class_name=class_name, name=name, extensions=tuple(e.lower() for e in extensions))
    _LAZY_BY_NAME[name] = spec
    for ext in spec.extensions:
        _NAME_BY_EXT[ext] = name


def _load_from_spec(spec: _LazySpec) -> Type[Language]:
    # Both relative (".python") and absolute module names are supported.
    mod = importlib.import_module(spec.module, package=__package__)
    cls = getattr(mod, spec.class_name, None)
    if cls is None:
        raise RuntimeError(f"Language class '{spec.class_name}' not found in {spec.module}")
    if not issubclass(cls, Language):
        raise TypeError(f"{spec.module}.{spec.class_name} is not a subclass of Language")
    _CLASS_BY_NAME[spec.name] = cls
    return cls


def get_language(name: str) -> Language:
    """Instantiate a registered language by name."""
    cls = _CLASS_BY_NAME.get(name)
    if cls is None:
        spec = _LAZY_BY_NAME.get(name)
        if spec is None:
            raise UnknownComponentError("language", name, list_languages())
        cls = _load_from_spec(spec)
    return cls()


def language_for_path(path: Path) -> Optional[str]:
    """Language name registered for the path's extension, if any."""
    return _NAME_BY_EXT.get(path.suffix.lower())


def list_languages() -> List[str]:
    return sorted(_LAZY_BY_NAME)
