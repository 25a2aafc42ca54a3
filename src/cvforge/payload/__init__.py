"""Payload normalization for incoming résumé requests."""

from cvforge.payload.normalizer import PayloadShape, detect_shape, normalize_payload

__all__ = [
    "PayloadShape",
    "detect_shape",
    "normalize_payload",
]
