"""
Before-send and after-send hooks.

A hook is either absent, a plain callable, or a named reference to a
function living in a module. Named references are resolved on every call.
"""

import importlib
import inspect
from dataclasses import dataclass
from types import ModuleType
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from sentry_sender.errors import HookShapeError

if TYPE_CHECKING:
    from sentry_sender.models import SendResult


BEFORE_SEND = "before_send"
AFTER_SEND = "after_send"

HOOK_ARITY = {
    BEFORE_SEND: 1,
    AFTER_SEND: 2,
}


@dataclass(frozen=True)
class CallbackHook:
    function: Callable[..., Any]

    def resolve(self) -> Callable[..., Any]:
        return self.function


@dataclass(frozen=True)
class NamedReferenceHook:
    target: Union[str, ModuleType]
    function: str

    def resolve(self) -> Callable[..., Any]:
        module = self.target
        if isinstance(module, str):
            module = importlib.import_module(module)

        return getattr(module, self.function)

    def __str__(self) -> str:
        target = self.target
        if isinstance(target, ModuleType):
            target = target.__name__
        return f"{target}:{self.function}"


Hook = Optional[Union[CallbackHook, NamedReferenceHook]]


def _accepts_positional(function: Callable[..., Any], arity: int) -> bool:
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        # Some builtins carry no signature, trust them
        return True

    try:
        signature.bind(*([None] * arity))
    except TypeError:
        return False

    return True


def _is_reference_part(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def load_hook(value: Any, hook_name: str) -> Hook:
    """
    Validate a configured hook value and turn it into a Hook.

    Accepted shapes:
        * None: no hook.
        * A callable accepting the hook's positional arguments.
        * A ``(module, function)`` pair, module given as object or dotted path.
        * A ``"package.module:function"`` string.

    Args:
        value: The configured value.
        hook_name (str): ``before_send`` or ``after_send``.

    Returns:
        Hook: The normalized hook.

    Raises:
        HookShapeError: If the value has any other shape.
    """
    arity = HOOK_ARITY[hook_name]

    if value is None or isinstance(value, (CallbackHook, NamedReferenceHook)):
        return value

    if isinstance(value, str):
        target, sep, function = value.partition(":")
        if sep and _is_reference_part(target) and _is_reference_part(function):
            return NamedReferenceHook(target=target.strip(), function=function.strip())
        raise HookShapeError(hook_name, arity)

    if isinstance(value, tuple):
        if len(value) == 2:
            target, function = value
            if (
                isinstance(target, ModuleType) or _is_reference_part(target)
            ) and _is_reference_part(function):
                return NamedReferenceHook(target=target, function=function)
        raise HookShapeError(hook_name, arity)

    if callable(value) and _accepts_positional(value, arity):
        return CallbackHook(function=value)

    raise HookShapeError(hook_name, arity)


def call_before_send(hook: Hook, event: Any) -> Any:
    """
    Run the before-send hook, its return value replaces the event.
    """
    if hook is None:
        return event

    return hook.resolve()(event)


def call_after_send(hook: Hook, event: Any, result: "SendResult") -> "SendResult":
    """
    Run the after-send hook for its side effects and hand back ``result``.
    """
    if hook is not None:
        hook.resolve()(event, result)

    return result
