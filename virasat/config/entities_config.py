"""
Entity Families Configuration
Defines the ten record families stored per user: their Supabase table, which
form fields are mandatory, which are optional, default values, and the option
labels the UI offers for constrained fields (labels are not enforced by the store).
"""

ENTITY_FAMILIES = {
    "bank_accounts": {
        "table": "bank_accounts",
        "required": ["type", "bank", "account_number", "balance"],
        "optional": ["status"],
        "defaults": {"status": "Active"},
        "options": {
            "type": [
                "Savings Account", "Current Account", "Fixed Deposit",
                "Recurring Deposit", "Credit Card", "Loan Account", "Other"
            ],
            "status": ["Active", "Inactive", "Closed"],
        },
        "description": "Bank accounts and deposits"
    },
    "investments": {
        "table": "investments",
        "required": ["type", "current_value"],
        "optional": ["scheme", "company", "units", "shares", "gain_loss"],
        "defaults": {},
        "options": {
            "type": ["Mutual Fund", "Stocks", "Bonds", "PPF", "NSC", "FD", "Other"],
        },
        "description": "Mutual funds, stocks and other investments"
    },
    "insurance_policies": {
        "table": "insurance_policies",
        "required": ["type", "provider", "policy_number", "premium_amount", "end_date"],
        "optional": ["coverage_amount", "start_date", "status"],
        "defaults": {"status": "Active"},
        "options": {
            "type": [
                "Life Insurance", "Health Insurance", "Motor Insurance",
                "Home Insurance", "Travel Insurance", "Term Insurance", "Other"
            ],
            "status": ["Active", "Inactive", "Expired"],
        },
        "description": "Life, health and property insurance policies"
    },
    "health_records": {
        "table": "health_records",
        "required": ["type", "provider", "date"],
        "optional": ["status", "notes"],
        "defaults": {"status": "Completed"},
        "options": {
            "type": [
                "Health Checkup", "Vaccination", "Blood Test", "X-Ray",
                "MRI Scan", "Surgery", "Dental Checkup", "Eye Checkup", "Other"
            ],
            "status": ["Completed", "Pending", "Cancelled"],
        },
        "description": "Medical history and checkups"
    },
    "medications": {
        "table": "medications",
        "required": ["name", "dosage", "frequency", "prescribed_by"],
        "optional": ["start_date"],
        "defaults": {},
        "options": {
            "frequency": [
                "Once daily", "Twice daily", "Three times daily",
                "Once weekly", "As needed", "Other"
            ],
        },
        "description": "Current and past medications"
    },
    "passwords": {
        "table": "passwords",
        "required": ["service", "username", "password"],
        "optional": ["category", "last_updated"],
        "defaults": {"category": "Personal"},
        "options": {
            "category": ["Personal", "Financial", "Work", "Social Media", "Shopping", "Other"],
        },
        "description": "Account passwords and PINs"
    },
    "security_questions": {
        "table": "security_questions",
        "required": ["service", "question", "answer"],
        "optional": ["category"],
        "defaults": {"category": "Banking"},
        "options": {
            "category": ["Banking", "Insurance", "Social Media", "Email", "Other"],
        },
        "description": "Security questions and answers"
    },
    "properties": {
        "table": "properties",
        "required": ["type", "address", "area", "value"],
        "optional": ["registration_number", "purchase_date"],
        "defaults": {},
        "options": {
            "type": [
                "Residential House", "Apartment", "Commercial Plot", "Office Space",
                "Shop", "Warehouse", "Agricultural Land", "Other"
            ],
        },
        "description": "Land, houses and other real estate"
    },
    "vehicles": {
        "table": "vehicles",
        "required": ["type", "model", "registration_number"],
        "optional": ["purchase_value", "current_value", "insurance_expiry"],
        "defaults": {},
        "options": {
            "type": ["Car", "Motorcycle", "Scooter", "Bicycle", "Truck", "Bus", "Other"],
        },
        "description": "Cars, two-wheelers and other vehicles"
    },
    "nominees": {
        "table": "nominees",
        "required": ["name", "relationship", "percentage"],
        "optional": ["phone", "email", "address"],
        "defaults": {},
        "options": {
            "relationship": [
                "Spouse", "Son", "Daughter", "Father", "Mother",
                "Brother", "Sister", "Friend", "Other"
            ],
        },
        "description": "Beneficiaries of the digital legacy"
    },
}

# Keyword -> display category for documents uploaded without an explicit category
DOCUMENT_CATEGORY_KEYWORDS = [
    (("insurance",), "Insurance"),
    (("bank",), "Banking"),
    (("medical", "health"), "Medical"),
    (("property",), "Properties"),
]

# Categories offered on the upload form (value -> label)
DOCUMENT_CATEGORIES = {
    "insurance": "Insurance",
    "banking": "Banking",
    "medical": "Medical",
    "properties": "Properties",
    "pins": "PINs & Passwords",
    "other": "Other",
}


def get_family_catalog():
    """
    Returns the family definitions in a client-friendly shape
    Format: [
        {"slug": "bank_accounts", "table": "...", "required": [...], "optional": [...],
         "defaults": {...}, "options": {...}, "description": "..."},
        ...
    ]
    """
    catalog = []
    for slug, family_config in ENTITY_FAMILIES.items():
        catalog.append({
            "slug": slug,
            "table": family_config["table"],
            "required": list(family_config["required"]),
            "optional": list(family_config["optional"]),
            "defaults": dict(family_config["defaults"]),
            "options": {k: list(v) for k, v in family_config["options"].items()},
            "description": family_config["description"]
        })
    return catalog
