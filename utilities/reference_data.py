"""
Static reference data for CRA scoring.
SIC code sets, industry keywords, jurisdiction labels and the default
engine configuration.
"""

import re

# SIC codes treated as adult entertainment
ADULT_ENTERTAINMENT_SIC = frozenset([
    1312, 1370, 1373, 64705, 9001, 9002, 9003, 9004,
])

# SIC codes treated as CBD / cannabis cultivation and processing
CBD_CANNABIS_SIC = frozenset([
    1190, 1200, 1210, 1220, 1230, 1240, 1250, 1260, 1270, 1280, 1290,
])

CBD_KEYWORDS = re.compile(r"cannabis|cbd|cannabidiol|marijuana|hemp", re.IGNORECASE)

CRYPTO_KEYWORDS = ("crypto", "cryptocurrency")

# Sanction likelihood (0-100) at or above which a screening hit counts as a match
SANCTION_LIKELIHOOD_THRESHOLD = 99

# Display names for reference jurisdictions in findings
JURISDICTION_LABELS = {
    "GB": "UK",
    "US": "US",
}

# FATF high-risk jurisdictions subject to a call for action
FATF_CALL_FOR_ACTION = ["IR", "KP", "MM"]

# Override name recorded by the absolute geography check
GEOGRAPHY_PROHIBITED_OVERRIDE = "Geography - Prohibited"

CONDITION_LABELS = {
    "geography_prohibited": "Geography prohibited",
    "sanctions": "Sanctions match",
    "pep_am": "PEP or adverse media",
    "shell_company": "Shell company indicators",
    "industry_cbd": "CBD/cannabis industry",
    "industry_crypto": "Crypto industry",
    "bearer_shares": "Bearer shares",
    "adult_entertainment": "Adult entertainment industry",
}

PILLAR_LABELS = {
    "geo": "Geography",
    "ind": "Industry",
    "ent": "Entity",
    "prod": "Product",
    "deliv": "Delivery",
}


# =============================================================================
# Default engine configuration (wire form)
# =============================================================================

DEFAULT_WEIGHTS = {"geo": 0.30, "ind": 0.15, "ent": 0.20, "prod": 0.30, "deliv": 0.05}

DEFAULT_COMPONENT_SCORES = {"geo": 3, "ind": 3, "ent": 3, "prod": 3, "deliv": 3}

DEFAULT_OVERRIDE_RULES = [
    {"id": "ovr-geo-prohibited", "name": GEOGRAPHY_PROHIBITED_OVERRIDE,
     "conditionType": "geography_prohibited", "resultScore": 5, "priority": 1},
    {"id": "ovr-sanctions", "name": "Sanctions Match",
     "conditionType": "sanctions", "resultScore": 5, "priority": 2},
    {"id": "ovr-pep-am", "name": "PEP / Adverse Media",
     "conditionType": "pep_am", "resultScore": 5, "priority": 3},
    {"id": "ovr-shell-company", "name": "Shell Company Indicators",
     "conditionType": "shell_company", "resultScore": 5, "priority": 4},
    {"id": "ovr-bearer-shares", "name": "Bearer Shares",
     "conditionType": "bearer_shares", "resultScore": 5, "priority": 5},
    {"id": "ovr-industry-cbd", "name": "Industry - CBD / Cannabis",
     "conditionType": "industry_cbd", "resultScore": 4, "priority": 6},
    {"id": "ovr-industry-crypto", "name": "Industry - Crypto",
     "conditionType": "industry_crypto", "resultScore": 4, "priority": 7},
    {"id": "ovr-adult-entertainment", "name": "Adult Entertainment",
     "conditionType": "adult_entertainment", "resultScore": 4, "priority": 8},
]

DEFAULT_RISK_BANDS = [
    {"name": "Low Risk", "min": 1, "max": 2},
    {"name": "Medium Risk", "min": 3, "max": 3},
    {"name": "High Risk", "min": 4, "max": 4},
    {"name": "Very High Risk", "min": 5, "max": 5},
]

DEFAULT_REFERENCE_JURISDICTION = "GB"
