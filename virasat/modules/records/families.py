from dataclasses import dataclass, field
from typing import Dict, Mapping, Tuple, Type

from pydantic import BaseModel

from virasat.config.entities_config import ENTITY_FAMILIES
from virasat.core.errors import RecordNotFound
from virasat.modules.records.schemas import (
    BankAccountCreate, InvestmentCreate, InsurancePolicyCreate, HealthRecordCreate,
    MedicationCreate, PasswordCreate, SecurityQuestionCreate, PropertyCreate,
    VehicleCreate, NomineeCreate
)

_CREATE_SCHEMAS: Dict[str, Type[BaseModel]] = {
    "bank_accounts": BankAccountCreate,
    "investments": InvestmentCreate,
    "insurance_policies": InsurancePolicyCreate,
    "health_records": HealthRecordCreate,
    "medications": MedicationCreate,
    "passwords": PasswordCreate,
    "security_questions": SecurityQuestionCreate,
    "properties": PropertyCreate,
    "vehicles": VehicleCreate,
    "nominees": NomineeCreate,
}


@dataclass(frozen=True)
class EntityFamily:
    slug: str
    table: str
    schema: Type[BaseModel]
    required: Tuple[str, ...]
    optional: Tuple[str, ...]
    description: str = ""
    # Applied when the field is omitted or blank
    defaults: Mapping[str, str] = field(default_factory=dict)

    @property
    def fields(self) -> Tuple[str, ...]:
        return self.required + self.optional

    @property
    def label(self) -> str:
        return self.slug.replace("_", " ")


FAMILIES: Dict[str, EntityFamily] = {
    slug: EntityFamily(
        slug=slug,
        table=family_config["table"],
        schema=_CREATE_SCHEMAS[slug],
        required=tuple(family_config["required"]),
        optional=tuple(family_config["optional"]),
        description=family_config["description"],
        defaults=dict(family_config["defaults"]),
    )
    for slug, family_config in ENTITY_FAMILIES.items()
}


def get_family(slug: str) -> EntityFamily:
    family = FAMILIES.get(slug)
    if family is None:
        raise RecordNotFound(f"Unknown record type: {slug}")
    return family
