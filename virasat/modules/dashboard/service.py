from supabase import Client
from virasat.modules.records.engine import ScopedCrudEngine
from virasat.modules.records.families import FAMILIES
from virasat.modules.documents.service import DocumentService
from virasat.modules.dashboard.schemas import DashboardResponse, DashboardSection
import logging

logger = logging.getLogger(__name__)

# Dashboard cards and the record families each one counts
SECTIONS = [
    ("insurance", "Insurance", ["insurance_policies"]),
    ("banking", "Banking & Investments", ["bank_accounts", "investments"]),
    ("medical", "Medical & Health", ["health_records", "medications"]),
    ("properties", "Properties & Assets", ["properties", "vehicles"]),
    ("pins", "PINs & Passwords", ["passwords", "security_questions"]),
    ("nominees", "Nominee Details", ["nominees"]),
]


class DashboardService:
    def __init__(self, supabase: Client, documents: DocumentService):
        self.supabase = supabase
        self.documents = documents

    def summary(self, owner_id: str) -> DashboardResponse:
        sections = []
        for key, title, slugs in SECTIONS:
            counts = {
                slug: ScopedCrudEngine(self.supabase, FAMILIES[slug], owner_id).count()
                for slug in slugs
            }
            sections.append(DashboardSection(key=key, title=title, counts=counts, total=sum(counts.values())))
        document_count = len(self.documents.list_documents(owner_id))
        return DashboardResponse(sections=sections, documents=document_count)
