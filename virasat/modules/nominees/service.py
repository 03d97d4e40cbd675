from virasat.core.errors import AuthRequired
from virasat.modules.nominees import registry
from virasat.modules.nominees.gate import AccessAuditEntry
from virasat.modules.nominees.schemas import AccessRequestResponse
from typing import List, Optional


class NomineeAccessService:
    def _gate(self, owner_id: Optional[str]):
        if not owner_id:
            raise AuthRequired()
        return registry.get_gate(owner_id)

    def submit(self, owner_id: Optional[str], certificate_url: str) -> AccessRequestResponse:
        """Check a death-certificate URL; InvalidURL / UntrustedDomain propagate as 400"""
        entry = self._gate(owner_id).submit(certificate_url)
        return self._to_response(entry)

    def list_requests(self, owner_id: Optional[str]) -> List[AccessRequestResponse]:
        return [self._to_response(entry) for entry in reversed(self._gate(owner_id).audit_log)]

    @staticmethod
    def _to_response(entry: AccessAuditEntry) -> AccessRequestResponse:
        return AccessRequestResponse(
            url=entry.url,
            hostname=entry.hostname,
            verified=entry.verified,
            timestamp=entry.timestamp,
        )
