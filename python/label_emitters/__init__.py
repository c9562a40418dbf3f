"""Printer code emitters and the protocol registry."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Type, Union

from label_model import Canvas, Element
from label_protocol import EmitterOptions, LabelEmitter

from .dpl_emitter import DplEmitter
from .epl_emitter import EplEmitter
from .zpl_emitter import ZplEmitter

EMITTER_REGISTRY: Dict[str, Type[LabelEmitter]] = {
    "ZPL": ZplEmitter,
    "EPL": EplEmitter,
    "DPL": DplEmitter,
}

Elements = Iterable[Union[Element, Mapping[str, Any]]]
CanvasLike = Union[Canvas, Mapping[str, Any], None]
OptionsLike = Union[EmitterOptions, Mapping[str, Any], None]


class UnsupportedProtocolError(KeyError):
    """Raised when a caller asks for a printer language that is not registered."""


def list_protocols() -> Iterable[str]:
    """Return the available protocol names."""

    return sorted(EMITTER_REGISTRY.keys())


def get_emitter(protocol: str, options: OptionsLike = None) -> LabelEmitter:
    """Return an emitter instance for ``protocol`` (case-insensitive)."""

    try:
        emitter_cls = EMITTER_REGISTRY[str(protocol).strip().upper()]
    except KeyError as exc:
        available = ", ".join(list_protocols())
        raise UnsupportedProtocolError(
            f"Unsupported protocol '{protocol}'. Available protocols: {available}"
        ) from exc
    return emitter_cls(options)


def emit_label(protocol: str, elements: Elements, canvas: CanvasLike = None, options: OptionsLike = None) -> str:
    """Generate the command stream for ``elements`` in the given protocol."""

    return get_emitter(protocol, options).emit(elements, canvas)


def emit_zpl(elements: Elements, canvas: CanvasLike = None, options: OptionsLike = None) -> str:
    return ZplEmitter(options).emit(elements, canvas)


def emit_epl(elements: Elements, canvas: CanvasLike = None, options: OptionsLike = None) -> str:
    return EplEmitter(options).emit(elements, canvas)


def emit_dpl(elements: Elements, canvas: CanvasLike = None, options: OptionsLike = None) -> str:
    return DplEmitter(options).emit(elements, canvas)


__all__ = [
    "DplEmitter",
    "EMITTER_REGISTRY",
    "EplEmitter",
    "UnsupportedProtocolError",
    "ZplEmitter",
    "emit_dpl",
    "emit_epl",
    "emit_label",
    "emit_zpl",
    "get_emitter",
    "list_protocols",
]
