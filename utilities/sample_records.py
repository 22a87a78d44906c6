"""
Built-in demo records for batch simulation.

Mix of domestic, offshore, PEP-linked and sanctioned entities. Extra fields
(transaction_volume, risk_profile) are carried through untouched.
"""

import copy

SAMPLE_RECORDS = [
    {
        "record_id": "UK-2024-001",
        "entity_name": "Sterling Capital Partners",
        "domicile": "GB",
        "entity_type": "Limited",
        "pep_count": 0,
        "sanction_match": False,
        "transaction_volume": 1250000,
        "risk_profile": "Standard",
    },
    {
        "record_id": "UK-2024-002",
        "entity_name": "Global Horizon Holdings",
        "domicile": "VG",
        "entity_type": "Trust",
        "pep_count": 2,
        "sanction_match": False,
        "transaction_volume": 8500000,
        "risk_profile": "High",
    },
    {
        "record_id": "UK-2024-003",
        "entity_name": "Astra Ventures Ltd",
        "domicile": "GB",
        "pep_count": 1,
        "sanction_match": True,
        "transaction_volume": 45000,
        "risk_profile": "Critical",
    },
    {
        "record_id": "UK-2024-004",
        "entity_name": "Riviera Yacht Charters",
        "domicile": "MC",
        "pep_count": 1,
        "sanction_match": False,
        "transaction_volume": 4500000,
        "risk_profile": "Medium",
    },
    {
        "record_id": "UK-2024-005",
        "entity_name": "Local Tech Solutions",
        "domicile": "GB",
        "product_type": "Current Account",
        "delivery_data": {"channels": ["Online", "Branch"]},
        "pep_count": 0,
        "sanction_match": False,
        "transaction_volume": 12000,
        "risk_profile": "Standard",
    },
]


def sample_records() -> list[dict]:
    """Fresh copies of the demo records."""
    return copy.deepcopy(SAMPLE_RECORDS)
