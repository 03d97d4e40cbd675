"""Thread-safe registry of owner_id -> NomineeAccessGate. Process-local; lost on restart.

One gate per owner that has used the access-request endpoints; each gate keeps a bounded audit log.
"""
import threading
import logging

from virasat.modules.nominees.gate import NomineeAccessGate

logger = logging.getLogger(__name__)
_lock = threading.Lock()
_registry: dict[str, NomineeAccessGate] = {}


def get_gate(owner_id: str) -> NomineeAccessGate:
    with _lock:
        gate = _registry.get(owner_id)
        if gate is None:
            gate = NomineeAccessGate()
            _registry[owner_id] = gate
            logger.debug(f"Created nominee access gate for {owner_id}")
        return gate


def reset() -> None:
    with _lock:
        _registry.clear()
