"""
State-based method dispatch ("control paths") via decorators.

A base method declared on a mixin fixes the public signature. Backends then
register one implementation per state value; at call time the installed
wrapper reads ``self._state`` and forwards the call to the implementation
registered for that state.

densekit uses the buffer's memory space as the state, so every kernel method
has exactly one host implementation and one accelerator implementation:

    path = create_path_builder()

    class FunctorMixin:
        def _apply_scalar(self, functor, params): ...

    @path(FunctorMixin, FunctorMixin._apply_scalar, MemorySpace.LOCAL)
    def _apply_scalar_host(self, functor, params): ...

Important notes
---------------
- The first registration through a builder replaces the class attribute with
  that builder's dispatching wrapper. Later registrations through the same
  builder only add entries.
- Registered implementations receive ``self`` like ordinary methods.
- Mappings are owned by the builder; two builders never share entries.
"""

from typing import (
    runtime_checkable,
    Callable,
    Hashable,
    Optional,
    Protocol,
    Union,
    Dict,
    Type,
    Any,
)
from typing_extensions import ParamSpec, TypeVar
from collections import namedtuple
from functools import wraps

from abc import abstractmethod

P = ParamSpec("P")
R = TypeVar("R")


def create_path_builder() -> Callable[
    [
        Type,
        Callable[P, R],
        Hashable,
        Optional[Union[Exception, Callable[[Callable[P, R], Any], None]]],
    ],
    Callable[[Callable[P, R]], Callable[P, R]],
]:
    """
    Create a "path builder" used to register per-state method implementations.

    Returns
    -------
    Callable
        ``templator(cls, method, state, trap_exception=None) -> decorator``.
        The decorator registers its target for ``(cls, method, state)`` and
        installs the dispatching wrapper on ``cls``.
    """

    MethodKey = namedtuple(
        "MethodKey",
        [
            "ClassName",
            "MethodName",
            "StateVal",
        ],
    )

    methods_map: Dict[MethodKey, Callable] = {}

    @runtime_checkable
    class StatefulObject(Protocol):
        """Objects that expose the `_state` used to select a control path."""

        @property
        @abstractmethod
        def _state(self) -> Optional[Any]: ...

    STATE_PROPERTY_NAME = next(
        (
            name
            for name, value in StatefulObject.__dict__.items()
            if value is StatefulObject._state
        )
    )

    def templator(
        cls: Type,
        method: Callable[P, R],
        state: Hashable,
        trap_exception: Optional[
            Union[Exception, Callable[[Callable[P, R], Any], None]]
        ] = None,
    ) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """
        Build a decorator registering one control path.

        Parameters
        ----------
        cls : Type
            Class whose method is dispatched.
        method : Callable[P, R]
            Base method; its metadata is copied onto the wrapper.
        state : Hashable
            State value selecting the decorated implementation.
        trap_exception : exception class or callable, optional
            What to do when no implementation matches ``self._state``:

            - ``None``: raise `NotImplementedError`
            - an exception class: raise an instance of it
            - a callable: called as ``trap_exception(method, self._state)``;
              if it returns instead of raising, `NotImplementedError` follows

        Raises
        ------
        TypeError
            If `state` is not hashable.
        """
        try:
            hash(state)
        except TypeError:
            raise TypeError(f"The argument for 'state' must be hashable. Got {state!r}")

        smk: MethodKey = MethodKey(cls.__name__, method.__name__, state)

        def _get_cur_smk(self: StatefulObject) -> MethodKey:
            return MethodKey(cls.__name__, method.__name__, self._state)

        def decorator(sub_method: Callable[P, R]) -> Callable[P, R]:
            methods_map[smk] = sub_method

            installed = getattr(cls, method.__name__, None)
            if getattr(installed, "__control_path__", None) is methods_map:
                return sub_method

            @wraps(method)
            def wrapper(self: Any, *args: P.args, **kwargs: P.kwargs) -> Any:
                if not isinstance(self, StatefulObject):
                    raise NotImplementedError(
                        "{} is missing attribute {} (@property)".format(
                            type(self), repr(STATE_PROPERTY_NAME)
                        )
                    )
                if sm := methods_map.get(_get_cur_smk(self)):
                    return sm(self, *args, **kwargs)
                if isinstance(trap_exception, type) and issubclass(
                    trap_exception, BaseException
                ):
                    raise trap_exception(
                        "Missing control path (state={}) for {}".format(
                            repr(self._state), method.__name__
                        )
                    )
                if callable(trap_exception):
                    trap_exception(method, self._state)
                raise NotImplementedError(
                    "Missing control path (state={}) for {}".format(
                        repr(self._state), repr(method)
                    )
                )

            wrapper.__control_path__ = methods_map
            setattr(cls, method.__name__, wrapper)
            return sub_method

        return decorator

    return templator
