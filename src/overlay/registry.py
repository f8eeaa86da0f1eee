"""
Type registry used to dispatch image sources to their handlers.

``new_registry`` returns a dict and a ``@register`` decorator keyed by type;
``find_registered`` looks a type up the way ``isinstance`` would, so a
handler registered for a base class also serves its subclasses::

    from overlay.registry import find_registered, new_registry

    HANDLERS, register = new_registry(attribute="source_type")

    @register(bytes)
    def from_bytes(resolver, source):
        ...

    handler = find_registered(HANDLERS, bytes)
    handler.source_type  # bytes
"""

from typing import Any, Callable, Optional, Tuple, TypeVar, Union

T = TypeVar("T")


def new_registry(attribute: Union[str, None] = None) -> Tuple[dict, Callable]:
    """
    Returns an empty dict and a @register decorator.

    :param attribute: Optional attribute name under which the registered key
                     is stored on each handler.
    :return: Tuple of (registry_dict, register_decorator)
    """
    registry: dict = {}

    def register(key: Any) -> Callable[[Callable[..., T]], Callable[..., T]]:
        def decorator(func: Callable[..., T]) -> Callable[..., T]:
            registry[key] = func
            if attribute:
                setattr(func, attribute, key)
            return func

        return decorator

    return registry, register


def find_registered(registry: dict, kind: type) -> Optional[Callable]:
    """
    Return the handler registered for ``kind`` or its nearest base class.

    Exact and MRO matches win over virtual subclasses such as
    ``os.PathLike``, which never appear in the MRO.
    """
    for cls in kind.__mro__:
        if cls in registry:
            return registry[cls]
    for key, handler in registry.items():
        if isinstance(key, type) and issubclass(kind, key):
            return handler
    return None
