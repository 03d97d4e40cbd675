from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Dict
from datetime import datetime


class RecordFields(BaseModel):
    """Base for add/edit forms. Amounts and dates are display strings, never parsed."""
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")


class BankAccountCreate(RecordFields):
    type: Optional[str] = None
    bank: Optional[str] = None
    account_number: Optional[str] = None
    balance: Optional[str] = None
    status: Optional[str] = None


class InvestmentCreate(RecordFields):
    type: Optional[str] = None
    scheme: Optional[str] = None
    company: Optional[str] = None
    units: Optional[str] = None
    shares: Optional[str] = None
    current_value: Optional[str] = None
    gain_loss: Optional[str] = None


class InsurancePolicyCreate(RecordFields):
    type: Optional[str] = None
    provider: Optional[str] = None
    policy_number: Optional[str] = None
    premium_amount: Optional[str] = None
    coverage_amount: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    status: Optional[str] = None


class HealthRecordCreate(RecordFields):
    type: Optional[str] = None
    provider: Optional[str] = None
    date: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class MedicationCreate(RecordFields):
    name: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    prescribed_by: Optional[str] = None
    start_date: Optional[str] = None


class PasswordCreate(RecordFields):
    service: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    category: Optional[str] = None
    last_updated: Optional[str] = None


class SecurityQuestionCreate(RecordFields):
    service: Optional[str] = None
    question: Optional[str] = None
    answer: Optional[str] = None
    category: Optional[str] = None


class PropertyCreate(RecordFields):
    type: Optional[str] = None
    address: Optional[str] = None
    area: Optional[str] = None
    value: Optional[str] = None
    registration_number: Optional[str] = None
    purchase_date: Optional[str] = None


class VehicleCreate(RecordFields):
    type: Optional[str] = None
    model: Optional[str] = None
    registration_number: Optional[str] = None
    purchase_value: Optional[str] = None
    current_value: Optional[str] = None
    insurance_expiry: Optional[str] = None


class NomineeCreate(RecordFields):
    name: Optional[str] = None
    relationship: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    percentage: Optional[str] = None


class RecordResponse(BaseModel):
    """A stored row: owner/bookkeeping columns plus the family's own fields"""
    id: int
    user_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        extra = "allow"


class FamilyInfo(BaseModel):
    slug: str
    table: str
    required: List[str]
    optional: List[str]
    defaults: Dict[str, str]
    options: Dict[str, List[str]]
    description: str
