from typing import Any, Callable, Optional

from api import APIS
from config import LANGUAGE_CODES


def lazy_external_import(module_name: str, class_name: str) -> Callable[..., Any]:
    """Lazily import a class and return a factory that instantiates it on call."""

    def import_class(*args: Any, **kwargs: Any):
        import importlib

        module = importlib.import_module(module_name)
        cls = getattr(module, class_name)
        return cls(*args, **kwargs)

    return import_class


def get_api_class(api_name: str) -> Callable[..., Any]:
    if api_name not in APIS:
        raise KeyError(f"Unknown weather API {api_name!r}; choose one of {sorted(APIS)}")
    return lazy_external_import(APIS[api_name], api_name)


def language_code(language: Optional[str], default: str) -> str:
    """Map a language preference such as 'Japanese' or 'en' to an ISO 639-1 code."""
    if not language:
        return default
    key = language.strip().lower()
    if key in LANGUAGE_CODES:
        return LANGUAGE_CODES[key]
    if key in LANGUAGE_CODES.values():
        return key
    return default
