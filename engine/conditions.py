"""
Override conditions — one boolean predicate per condition type.

Every predicate takes (record, config) and only returns True on positive
evidence: an absent flag never satisfies a condition.
"""

from models import CRAInput, CRAEngineConfig
from engine.component_scoring import resolve_country_code
from utilities.reference_data import (
    ADULT_ENTERTAINMENT_SIC, CBD_CANNABIS_SIC, CBD_KEYWORDS,
    CRYPTO_KEYWORDS, SANCTION_LIKELIHOOD_THRESHOLD,
)


def is_geography_prohibited(record: CRAInput, config: CRAEngineConfig) -> bool:
    """Explicit flag, or the resolved country is on the prohibited list."""
    if record.geography_prohibited is True:
        return True
    country = resolve_country_code(record)
    return bool(country) and country in config.prohibited_countries


def has_sanctions_hit(record: CRAInput, config: CRAEngineConfig) -> bool:
    if record.sanction_match is True:
        return True
    return (record.sanction_likelihood or 0) >= SANCTION_LIKELIHOOD_THRESHOLD


def has_pep_or_adverse_media(record: CRAInput, config: CRAEngineConfig) -> bool:
    return (
        (record.pep_count or 0) > 0
        or record.has_pep is True
        or record.has_adverse_media is True
    )


def looks_like_shell_company(record: CRAInput, config: CRAEngineConfig) -> bool:
    # All four indicators must be explicitly False
    return all(
        indicator is False
        for indicator in (record.has_employees, record.has_premises, record.has_cais, record.has_pp)
    )


def is_cbd_industry(record: CRAInput, config: CRAEngineConfig) -> bool:
    if any(code in CBD_CANNABIS_SIC for code in record.sic_codes):
        return True
    return bool(CBD_KEYWORDS.search(record.industry_description or ""))


def is_crypto_industry(record: CRAInput, config: CRAEngineConfig) -> bool:
    description = (record.industry_description or "").lower()
    return any(keyword in description for keyword in CRYPTO_KEYWORDS)


def has_bearer_shares(record: CRAInput, config: CRAEngineConfig) -> bool:
    return record.bearer_shares is True


def is_adult_entertainment(record: CRAInput, config: CRAEngineConfig) -> bool:
    return any(code in ADULT_ENTERTAINMENT_SIC for code in record.sic_codes)
