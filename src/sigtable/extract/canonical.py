"""Canonical signature strings for interface and function shapes.

A signature describes structure only: the declaration's own name never
appears in it, so two scopes exposing the same shape under different names
produce byte-identical strings.

Rendering rules:

    type          int, None, collections.abc.Iterator[str], int | None
    callable      (int, str=) -> bool        positional params by type only
                  (*Any, key: str, **Any) -> None
    method        read(int=) -> bytes
    property      closed: bool
    interface     members sorted by name, joined with "; "

Type variables are renumbered by first appearance inside one declaration
(``T1``, ``+T2`` for covariant, ``-T3`` for contravariant), so naming
choices such as ``T`` vs ``_T_co`` do not split otherwise identical shapes.
"""

from __future__ import annotations

import collections.abc
import inspect
import logging
import types
import typing

log = logging.getLogger(__name__)

# Attributes typing adds to protocol classes; never part of a shape.
_EXCLUDED_MEMBERS = frozenset({
    "__abstractmethods__",
    "__annotate__",
    "__annotate_func__",
    "__annotations__",
    "__annotations_cache__",
    "__callable_proto_members_only__",
    "__class_getitem__",
    "__dict__",
    "__doc__",
    "__firstlineno__",
    "__init__",
    "__init_subclass__",
    "__match_args__",
    "__module__",
    "__new__",
    "__non_callable_proto_members__",
    "__orig_bases__",
    "__parameters__",
    "__protocol_attrs__",
    "__qualname__",
    "__slots__",
    "__static_attributes__",
    "__subclasshook__",
    "__type_params__",
    "__weakref__",
})

_TypeAliasType = getattr(typing, "TypeAliasType", None)
_ParamSpec = getattr(typing, "ParamSpec", None)
_TypeVarTuple = getattr(typing, "TypeVarTuple", None)
_UNION_ORIGINS = (typing.Union, types.UnionType)

_P = inspect.Parameter


# ---------------------------------------------------------------------------
# Shape discovery
# ---------------------------------------------------------------------------


def is_protocol(obj) -> bool:
    """True for user protocol classes (not ``Protocol``/``Generic`` themselves)."""
    if not isinstance(obj, type) or obj in (typing.Protocol, typing.Generic):
        return False
    return bool(getattr(obj, "_is_protocol", False))


def _is_member_name(name: str) -> bool:
    if name in _EXCLUDED_MEMBERS or name.startswith("_abc_"):
        return False
    if name.startswith("_") and not (name.startswith("__") and name.endswith("__")):
        return False
    return True


def interface_members(cls) -> dict[str, object]:
    """The member set making up *cls*'s interface shape.

    Protocols contribute every member declared by the protocol classes in
    their MRO, plus the abstract members of non-protocol bases such as
    ``collections.abc.Iterable``; abstract base classes contribute their
    abstract members.  Members map to their raw (static) class attribute, or
    to the annotation for annotation-only protocol attributes.
    """
    members: dict[str, object] = {}
    if is_protocol(cls):
        for base in reversed(cls.__mro__):
            if base in (object, typing.Protocol, typing.Generic):
                continue
            if not is_protocol(base):
                for name in getattr(base, "__abstractmethods__", ()):
                    if _is_member_name(name):
                        members[name] = inspect.getattr_static(cls, name)
                continue
            for name, annotation in _annotations(base).items():
                if _is_member_name(name) and name not in base.__dict__:
                    members[name] = _Annotated(annotation, base)
            for name, value in base.__dict__.items():
                # defining __eq__ implicitly sets __hash__ = None
                if name == "__hash__" and value is None:
                    continue
                if _is_member_name(name):
                    members[name] = inspect.getattr_static(cls, name)
        return members
    for name in sorted(getattr(cls, "__abstractmethods__", ())):
        members[name] = inspect.getattr_static(cls, name)
    return members


def is_callback_protocol(cls) -> bool:
    return is_protocol(cls) and set(interface_members(cls)) == {"__call__"}


def callable_alias(obj):
    """The parameterized ``Callable[...]`` behind *obj*, or None.

    Accepts plain aliases (``Handler = Callable[[int], str]``) and PEP 695
    ``type Handler = Callable[[int], str]`` aliases.
    """
    if _TypeAliasType is not None and isinstance(obj, _TypeAliasType):
        obj = obj.__value__
    if isinstance(obj, type):
        return None
    if typing.get_origin(obj) is collections.abc.Callable and typing.get_args(obj):
        return obj
    return None


class _Annotated:
    """An annotation-only protocol member, remembering its owning class."""

    def __init__(self, annotation, owner):
        self.annotation = annotation
        self.owner = owner


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class Canonicalizer:
    """Renders one declaration; type variable numbering is per instance."""

    def __init__(self):
        self._typevars: dict[object, str] = {}

    def type_str(self, tp) -> str:
        if tp is _P.empty or tp is typing.Any:
            return "Any"
        if tp is None or tp is type(None):
            return "None"
        if tp is Ellipsis:
            return "..."
        if isinstance(tp, str):
            return tp
        if isinstance(tp, typing.ForwardRef):
            return tp.__forward_arg__
        if isinstance(tp, list):
            return "[" + ", ".join(self.type_str(a) for a in tp) + "]"
        if self._is_typevar(tp):
            return self._typevar_name(tp)

        origin = typing.get_origin(tp)
        if origin is not None:
            return self._generic_str(origin, typing.get_args(tp))
        if isinstance(tp, type):
            return _class_name(tp)
        name = getattr(tp, "__name__", None)
        module = getattr(tp, "__module__", None)
        if name and module:
            return name if module == "builtins" else f"{module}.{name}"
        return repr(tp)

    def _generic_str(self, origin, args) -> str:
        if origin in _UNION_ORIGINS:
            return " | ".join(sorted({self.type_str(a) for a in args}))
        if origin is collections.abc.Callable:
            return self.callable_args_str(args)
        if origin is typing.Literal:
            return "Literal[" + ", ".join(repr(a) for a in args) + "]"
        if origin is typing.Annotated:
            return self.type_str(args[0])
        name = _class_name(origin) if isinstance(origin, type) else _special_name(origin)
        if not args:
            return name
        return f"{name}[{', '.join(self.type_str(a) for a in args)}]"

    def callable_args_str(self, args) -> str:
        """Render ``Callable`` type arguments as ``(params) -> result``."""
        if not args:
            return "(...) -> Any"
        params, result = args[0], args[-1]
        if isinstance(params, list):
            inner = ", ".join(self.type_str(p) for p in params)
        else:
            inner = self.type_str(params)
        return f"({inner}) -> {self.type_str(result)}"

    def function_str(self, func, *, bound: bool = False) -> str:
        """Render a Python function's call shape as ``(params) -> result``."""
        try:
            sig = _signature(func)
        except (TypeError, ValueError):
            return "(...) -> Any"
        hints = _type_hints(func)
        params = list(sig.parameters.values())
        if bound and params and params[0].kind in (_P.POSITIONAL_ONLY, _P.POSITIONAL_OR_KEYWORD):
            params = params[1:]

        parts = []
        for p in params:
            t = self.type_str(hints.get(p.name, p.annotation))
            default = "=" if p.default is not _P.empty else ""
            if p.kind is _P.VAR_POSITIONAL:
                parts.append(f"*{t}")
            elif p.kind is _P.VAR_KEYWORD:
                parts.append(f"**{t}")
            elif p.kind is _P.KEYWORD_ONLY:
                parts.append(f"{p.name}: {t}{default}")
            else:
                parts.append(f"{t}{default}")
        result = self.type_str(hints.get("return", sig.return_annotation))
        return f"({', '.join(parts)}) -> {result}"

    def member_str(self, name: str, member) -> str:
        if isinstance(member, _Annotated):
            hints = _type_hints(member.owner)
            return f"{name}: {self.type_str(hints.get(name, member.annotation))}"
        if isinstance(member, property):
            if member.fget is None:
                return f"{name}: Any"
            return f"{name}: {self.type_str(_return_hint(member.fget))}"
        if isinstance(member, staticmethod):
            return name + self.function_str(member.__func__)
        if isinstance(member, classmethod):
            return name + self.function_str(member.__func__, bound=True)
        if callable(member):
            return name + self.function_str(member, bound=True)
        return f"{name}: {_class_name(type(member))}"

    def _is_typevar(self, tp) -> bool:
        kinds = tuple(k for k in (typing.TypeVar, _ParamSpec, _TypeVarTuple) if k is not None)
        return isinstance(tp, kinds)

    def _typevar_name(self, tv) -> str:
        name = self._typevars.get(tv)
        if name is None:
            n = len(self._typevars) + 1
            if _ParamSpec is not None and isinstance(tv, _ParamSpec):
                name = f"P{n}"
            elif _TypeVarTuple is not None and isinstance(tv, _TypeVarTuple):
                name = f"Ts{n}"
            elif getattr(tv, "__covariant__", False):
                name = f"+T{n}"
            elif getattr(tv, "__contravariant__", False):
                name = f"-T{n}"
            else:
                name = f"T{n}"
            self._typevars[tv] = name
        return name


def _class_name(cls: type) -> str:
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _special_name(form) -> str:
    name = getattr(form, "_name", None) or getattr(form, "__name__", None)
    return name or repr(form)


def _type_hints(obj) -> dict:
    """Resolved annotations of *obj*; raw annotations when resolution fails."""
    try:
        return typing.get_type_hints(obj)
    except Exception as exc:
        log.debug("cannot resolve annotations of %r: %s", obj, exc)
        return {}


def _signature(func):
    try:
        return inspect.signature(func)
    except NameError:
        # deferred annotations naming undefined objects (3.14+)
        import annotationlib

        return inspect.signature(func, annotation_format=annotationlib.Format.STRING)


def _annotations(cls) -> dict:
    try:
        return inspect.get_annotations(cls)
    except NameError:
        import annotationlib

        return inspect.get_annotations(cls, format=annotationlib.Format.STRING)


def _return_hint(func):
    hints = _type_hints(func)
    if "return" in hints:
        return hints["return"]
    try:
        return _signature(func).return_annotation
    except (TypeError, ValueError):
        return _P.empty


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def interface_signature(cls) -> str:
    """Signature of an interface-shaped class; empty when it has no members."""
    canon = Canonicalizer()
    members = interface_members(cls)
    return "; ".join(canon.member_str(name, members[name]) for name in sorted(members))


def function_signature(obj) -> str:
    """Signature of a function-shaped declaration.

    *obj* is a ``Callable[...]`` alias (plain or PEP 695) or a callback
    protocol.
    """
    canon = Canonicalizer()
    alias = callable_alias(obj)
    if alias is not None:
        return canon.callable_args_str(typing.get_args(alias))
    if is_callback_protocol(obj):
        member = interface_members(obj)["__call__"]
        return canon.function_str(member, bound=True)
    raise TypeError(f"{obj!r} is not function-shaped")


def canonicalize(obj) -> str:
    """Canonical signature of an interface- or function-shaped declaration."""
    if callable_alias(obj) is not None or is_callback_protocol(obj):
        return function_signature(obj)
    if isinstance(obj, type):
        sig = interface_signature(obj)
        if sig:
            return sig
    raise TypeError(f"{obj!r} has no interface or function shape")
