"""
Death-certificate URL check for nominee access.

A URL passes only if it is a valid http(s) URL whose hostname has at least
one label in front of a final `gov.in` pair of labels. The comparison is per
label, so `example.gov.in` passes while `fake.gov.in.evil.com`, `evilgov.in`
and bare `gov.in` do not.

A grant is a UI-level decision only: it is logged for the session, but no
record visibility or permission changes because of it.
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Deque, Optional
import logging

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from virasat.core.errors import InvalidURL, UntrustedDomain

logger = logging.getLogger(__name__)

_URL_ADAPTER = TypeAdapter(AnyHttpUrl)
TRUSTED_SUFFIX = ("gov", "in")
# Newest grants kept per owner; older entries drop off
AUDIT_LOG_LIMIT = 100


class GateState(str, Enum):
    IDLE = "idle"
    SUBMITTED = "submitted"
    GRANTED = "granted"
    REJECTED = "rejected"


def verify_certificate_url(url: Optional[str]) -> str:
    """Return the lower-cased hostname of a trusted certificate URL, or raise"""
    candidate = (url or "").strip()
    if not candidate:
        raise InvalidURL()
    try:
        parsed = _URL_ADAPTER.validate_python(candidate)
    except ValidationError:
        raise InvalidURL()

    hostname = (parsed.host or "").lower()
    if hostname.endswith("."):
        hostname = hostname[:-1]
    labels = hostname.split(".")
    if len(labels) <= len(TRUSTED_SUFFIX) or not all(labels):
        raise UntrustedDomain()
    if tuple(labels[-len(TRUSTED_SUFFIX):]) != TRUSTED_SUFFIX:
        raise UntrustedDomain()
    return hostname


@dataclass
class AccessAuditEntry:
    url: str
    hostname: str
    verified: bool = True
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class NomineeAccessGate:
    """Idle -> Submitted -> Granted | Rejected, then back to Idle for the next submission"""

    def __init__(self):
        self.state = GateState.IDLE
        self.last_outcome: Optional[GateState] = None
        self.audit_log: Deque[AccessAuditEntry] = deque(maxlen=AUDIT_LOG_LIMIT)

    def submit(self, url: Optional[str]) -> AccessAuditEntry:
        self.state = GateState.SUBMITTED
        try:
            hostname = verify_certificate_url(url)
        except (InvalidURL, UntrustedDomain) as e:
            self.last_outcome = GateState.REJECTED
            logger.info(f"Nominee access rejected ({type(e).__name__}): {url!r}")
            raise
        finally:
            self.state = GateState.IDLE

        entry = AccessAuditEntry(url=url.strip(), hostname=hostname)
        self.audit_log.append(entry)
        self.last_outcome = GateState.GRANTED
        logger.info(f"Nominee access granted for certificate on {hostname}")
        return entry
