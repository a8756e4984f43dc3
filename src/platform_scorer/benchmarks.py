"""Static benchmark tables for the candidate AI platforms.

Data sourced from the Enterprise AI Adoption Guide 2025. The tables are
versioned with the code; nothing here is computed at runtime.

Every lookup goes through ``lookup_or`` so a miss always resolves to a
documented default:

- unknown department / platform in ROI_BENCHMARKS -> 0.0 hours saved
- platform missing from PLATFORM_PRICING -> DEFAULT_MONTHLY_PRICE
- standard missing from COMPLIANCE_DATA -> ComplianceStatus.UNKNOWN
- tool missing from INTEGRATION_SUPPORT -> IntegrationTier.NOT_SUPPORTED
- pain point missing from PAIN_POINT_SOLUTIONS -> None (skipped)
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional, TypeVar

from .schema import (
    ComplianceStatus,
    IntegrationTier,
    PainPointSolution,
    Platform,
    PlatformId,
)

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


# =============================================================================
# Catalog
# =============================================================================

AI_PLATFORMS: list[Platform] = [
    Platform(id=PlatformId.GOOGLE_GEMINI, display_name="Google Gemini", color="#4285F4"),
    Platform(id=PlatformId.MICROSOFT_COPILOT, display_name="Microsoft Copilot", color="#00A4EF"),
    Platform(id=PlatformId.ANTHROPIC_CLAUDE, display_name="Anthropic Claude", color="#D97757"),
    Platform(id=PlatformId.OPENAI_CHATGPT, display_name="OpenAI ChatGPT", color="#10A37F"),
]

PLATFORM_IDS: list[PlatformId] = [p.id for p in AI_PLATFORMS]

DEPARTMENTS = [
    "Sales",
    "Marketing",
    "Finance",
    "HR",
    "Customer Service",
    "Legal",
    "IT",
    "Operations",
    "Product",
    "Engineering",
]

COMPLIANCE_STANDARDS = [
    "SOC 2",
    "ISO 27001",
    "HIPAA",
    "GDPR",
    "FedRAMP",
    "PCI DSS",
    "CCPA",
    "NIST",
    "HITRUST",
]

INTEGRATION_CATEGORIES = {
    "CRM": ["Salesforce", "HubSpot", "Dynamics 365", "Zoho"],
    "ERP": ["SAP", "Oracle", "NetSuite", "Workday"],
    "HRIS": ["Workday", "BambooHR", "ADP", "UKG"],
    "Productivity": ["Microsoft 365", "Google Workspace", "Slack", "Zoom"],
    "Development": ["GitHub", "GitLab", "Jira", "Azure DevOps"],
    "Security": ["Okta", "Azure AD", "CrowdStrike", "Palo Alto"],
    "Marketing": ["Marketo", "Pardot", "Mailchimp", "Hootsuite"],
    "Analytics": ["Tableau", "Power BI", "Looker", "Qlik"],
}

PAIN_POINTS = [
    "Manual data entry and processing",
    "Long proposal and document creation cycles",
    "Multilingual communication barriers",
    "Inefficient customer support workflows",
    "Complex contract review processes",
    "Time-consuming research and analysis",
    "Repetitive email and communication tasks",
    "Data synthesis from multiple sources",
    "Content creation bottlenecks",
    "Meeting transcription and summarization",
]


# =============================================================================
# ROI Benchmarks
# =============================================================================

# Hours saved per user per week, by department and platform
ROI_BENCHMARKS: dict[str, dict[str, float]] = {
    "Sales": {
        "google_gemini": 4.2,
        "microsoft_copilot": 5.1,
        "anthropic_claude": 3.8,
        "openai_chatgpt": 4.5,
    },
    "Marketing": {
        "google_gemini": 5.5,
        "microsoft_copilot": 4.8,
        "anthropic_claude": 5.2,
        "openai_chatgpt": 6.1,
    },
    "Finance": {
        "google_gemini": 3.9,
        "microsoft_copilot": 5.8,
        "anthropic_claude": 4.2,
        "openai_chatgpt": 3.7,
    },
    "HR": {
        "google_gemini": 4.1,
        "microsoft_copilot": 5.3,
        "anthropic_claude": 4.6,
        "openai_chatgpt": 4.0,
    },
    "Customer Service": {
        "google_gemini": 6.2,
        "microsoft_copilot": 5.5,
        "anthropic_claude": 5.9,
        "openai_chatgpt": 6.5,
    },
    "Legal": {
        "google_gemini": 5.0,
        "microsoft_copilot": 4.5,
        "anthropic_claude": 6.8,
        "openai_chatgpt": 5.2,
    },
    "IT": {
        "google_gemini": 4.8,
        "microsoft_copilot": 6.5,
        "anthropic_claude": 4.1,
        "openai_chatgpt": 5.5,
    },
    "Operations": {
        "google_gemini": 4.3,
        "microsoft_copilot": 5.0,
        "anthropic_claude": 4.7,
        "openai_chatgpt": 4.2,
    },
    "Product": {
        "google_gemini": 5.1,
        "microsoft_copilot": 4.6,
        "anthropic_claude": 5.4,
        "openai_chatgpt": 5.8,
    },
    "Engineering": {
        "google_gemini": 5.5,
        "microsoft_copilot": 5.2,
        "anthropic_claude": 4.9,
        "openai_chatgpt": 6.2,
    },
}

# Monthly price per user (USD)
PLATFORM_PRICING: dict[str, float] = {
    "google_gemini": 20,
    "microsoft_copilot": 30,
    "anthropic_claude": 25,
    "openai_chatgpt": 20,
}

DEFAULT_MONTHLY_PRICE = 20.0


# =============================================================================
# Compliance and Integration Support
# =============================================================================

COMPLIANCE_DATA: dict[str, dict[str, str]] = {
    "google_gemini": {
        "SOC 2": "certified",
        "ISO 27001": "certified",
        "HIPAA": "in_progress",
        "GDPR": "certified",
        "FedRAMP": "not_certified",
        "PCI DSS": "certified",
        "CCPA": "certified",
        "NIST": "in_progress",
        "HITRUST": "not_certified",
    },
    "microsoft_copilot": {
        "SOC 2": "certified",
        "ISO 27001": "certified",
        "HIPAA": "certified",
        "GDPR": "certified",
        "FedRAMP": "certified",
        "PCI DSS": "certified",
        "CCPA": "certified",
        "NIST": "certified",
        "HITRUST": "certified",
    },
    "anthropic_claude": {
        "SOC 2": "certified",
        "ISO 27001": "certified",
        "HIPAA": "certified",
        "GDPR": "certified",
        "FedRAMP": "not_certified",
        "PCI DSS": "in_progress",
        "CCPA": "certified",
        "NIST": "in_progress",
        "HITRUST": "not_certified",
    },
    "openai_chatgpt": {
        "SOC 2": "certified",
        "ISO 27001": "certified",
        "HIPAA": "in_progress",
        "GDPR": "certified",
        "FedRAMP": "not_certified",
        "PCI DSS": "in_progress",
        "CCPA": "certified",
        "NIST": "in_progress",
        "HITRUST": "not_certified",
    },
}

INTEGRATION_SUPPORT: dict[str, dict[str, str]] = {
    "google_gemini": {
        "Salesforce": "api",
        "HubSpot": "api",
        "Dynamics 365": "limited",
        "Zoho": "limited",
        "SAP": "api",
        "Oracle": "api",
        "NetSuite": "limited",
        "Workday": "api",
        "BambooHR": "limited",
        "ADP": "not_supported",
        "UKG": "not_supported",
        "Microsoft 365": "limited",
        "Google Workspace": "native",
        "Slack": "api",
        "Zoom": "api",
        "GitHub": "api",
        "GitLab": "api",
        "Jira": "api",
        "Azure DevOps": "limited",
        "Okta": "api",
        "Azure AD": "limited",
        "CrowdStrike": "not_supported",
        "Palo Alto": "not_supported",
        "Marketo": "limited",
        "Pardot": "limited",
        "Mailchimp": "api",
        "Hootsuite": "limited",
        "Tableau": "api",
        "Power BI": "limited",
        "Looker": "api",
        "Qlik": "limited",
    },
    "microsoft_copilot": {
        "Salesforce": "api",
        "HubSpot": "api",
        "Dynamics 365": "native",
        "Zoho": "limited",
        "SAP": "api",
        "Oracle": "api",
        "NetSuite": "api",
        "Workday": "api",
        "BambooHR": "api",
        "ADP": "limited",
        "UKG": "limited",
        "Microsoft 365": "native",
        "Google Workspace": "api",
        "Slack": "api",
        "Zoom": "api",
        "GitHub": "api",
        "GitLab": "api",
        "Jira": "api",
        "Azure DevOps": "native",
        "Okta": "api",
        "Azure AD": "native",
        "CrowdStrike": "api",
        "Palo Alto": "api",
        "Marketo": "api",
        "Pardot": "limited",
        "Mailchimp": "api",
        "Hootsuite": "limited",
        "Tableau": "api",
        "Power BI": "native",
        "Looker": "api",
        "Qlik": "api",
    },
    "anthropic_claude": {
        "Salesforce": "api",
        "HubSpot": "api",
        "Dynamics 365": "api",
        "Zoho": "api",
        "SAP": "api",
        "Oracle": "api",
        "NetSuite": "api",
        "Workday": "api",
        "BambooHR": "api",
        "ADP": "api",
        "UKG": "api",
        "Microsoft 365": "api",
        "Google Workspace": "api",
        "Slack": "native",
        "Zoom": "api",
        "GitHub": "api",
        "GitLab": "api",
        "Jira": "api",
        "Azure DevOps": "api",
        "Okta": "api",
        "Azure AD": "api",
        "CrowdStrike": "limited",
        "Palo Alto": "limited",
        "Marketo": "api",
        "Pardot": "api",
        "Mailchimp": "api",
        "Hootsuite": "api",
        "Tableau": "api",
        "Power BI": "api",
        "Looker": "api",
        "Qlik": "api",
    },
    "openai_chatgpt": {
        "Salesforce": "api",
        "HubSpot": "api",
        "Dynamics 365": "api",
        "Zoho": "api",
        "SAP": "api",
        "Oracle": "api",
        "NetSuite": "api",
        "Workday": "api",
        "BambooHR": "api",
        "ADP": "limited",
        "UKG": "limited",
        "Microsoft 365": "api",
        "Google Workspace": "api",
        "Slack": "api",
        "Zoom": "api",
        "GitHub": "native",
        "GitLab": "api",
        "Jira": "api",
        "Azure DevOps": "api",
        "Okta": "api",
        "Azure AD": "api",
        "CrowdStrike": "limited",
        "Palo Alto": "limited",
        "Marketo": "api",
        "Pardot": "api",
        "Mailchimp": "api",
        "Hootsuite": "api",
        "Tableau": "api",
        "Power BI": "api",
        "Looker": "api",
        "Qlik": "api",
    },
}


# =============================================================================
# Pain Point Solutions
# =============================================================================

PAIN_POINT_SOLUTIONS: dict[str, PainPointSolution] = {
    "Manual data entry and processing": PainPointSolution(
        solution="Automated data extraction and structured output",
        platforms=[PlatformId.MICROSOFT_COPILOT, PlatformId.GOOGLE_GEMINI, PlatformId.OPENAI_CHATGPT],
    ),
    "Long proposal and document creation cycles": PainPointSolution(
        solution="AI-assisted content generation and templates",
        platforms=[PlatformId.ANTHROPIC_CLAUDE, PlatformId.OPENAI_CHATGPT, PlatformId.MICROSOFT_COPILOT],
    ),
    "Multilingual communication barriers": PainPointSolution(
        solution="Real-time translation and localization",
        platforms=[PlatformId.GOOGLE_GEMINI, PlatformId.OPENAI_CHATGPT, PlatformId.ANTHROPIC_CLAUDE],
    ),
    "Inefficient customer support workflows": PainPointSolution(
        solution="Automated response generation and ticket routing",
        platforms=[PlatformId.OPENAI_CHATGPT, PlatformId.GOOGLE_GEMINI, PlatformId.ANTHROPIC_CLAUDE],
    ),
    "Complex contract review processes": PainPointSolution(
        solution="Document analysis and risk identification",
        platforms=[PlatformId.ANTHROPIC_CLAUDE, PlatformId.OPENAI_CHATGPT, PlatformId.MICROSOFT_COPILOT],
    ),
    "Time-consuming research and analysis": PainPointSolution(
        solution="Information synthesis and summarization",
        platforms=[PlatformId.ANTHROPIC_CLAUDE, PlatformId.GOOGLE_GEMINI, PlatformId.OPENAI_CHATGPT],
    ),
    "Repetitive email and communication tasks": PainPointSolution(
        solution="Email drafting and response automation",
        platforms=[PlatformId.MICROSOFT_COPILOT, PlatformId.OPENAI_CHATGPT, PlatformId.GOOGLE_GEMINI],
    ),
    "Data synthesis from multiple sources": PainPointSolution(
        solution="Multi-source data aggregation and insights",
        platforms=[PlatformId.GOOGLE_GEMINI, PlatformId.ANTHROPIC_CLAUDE, PlatformId.MICROSOFT_COPILOT],
    ),
    "Content creation bottlenecks": PainPointSolution(
        solution="AI content generation and editing",
        platforms=[PlatformId.OPENAI_CHATGPT, PlatformId.ANTHROPIC_CLAUDE, PlatformId.GOOGLE_GEMINI],
    ),
    "Meeting transcription and summarization": PainPointSolution(
        solution="Automated meeting notes and action items",
        platforms=[PlatformId.MICROSOFT_COPILOT, PlatformId.GOOGLE_GEMINI, PlatformId.OPENAI_CHATGPT],
    ),
}


# =============================================================================
# Lookups
# =============================================================================


def lookup_or(table: Mapping[K, V], key: K, default: V) -> V:
    """Look up ``key`` in ``table``, returning ``default`` on a miss.

    This is the only place a benchmark miss is resolved, so the defaulting
    rules listed in the module docstring stay auditable.
    """
    if key in table:
        return table[key]
    logger.debug("Benchmark miss for %r; using default %r", key, default)
    return default


def hours_saved(
    department: str,
    platform_id: str,
    table: Optional[Mapping[str, Mapping[str, float]]] = None,
) -> float:
    """Hours saved per user per week for a department on a platform."""
    table = ROI_BENCHMARKS if table is None else table
    by_platform = lookup_or(table, department, {})
    return float(lookup_or(by_platform, platform_id, 0.0))


def monthly_price(platform_id: str, table: Optional[Mapping[str, float]] = None) -> float:
    """Monthly per-user price of a platform."""
    table = PLATFORM_PRICING if table is None else table
    return float(lookup_or(table, platform_id, DEFAULT_MONTHLY_PRICE))


def compliance_status(
    platform_id: str,
    standard: str,
    table: Optional[Mapping[str, Mapping[str, str]]] = None,
) -> ComplianceStatus:
    """Certification status of a platform for a standard."""
    table = COMPLIANCE_DATA if table is None else table
    by_standard = lookup_or(table, platform_id, {})
    return ComplianceStatus(lookup_or(by_standard, standard, ComplianceStatus.UNKNOWN.value))


def integration_tier(
    platform_id: str,
    tool: str,
    table: Optional[Mapping[str, Mapping[str, str]]] = None,
) -> IntegrationTier:
    """Support tier of a platform for an integration target."""
    table = INTEGRATION_SUPPORT if table is None else table
    by_tool = lookup_or(table, platform_id, {})
    return IntegrationTier(lookup_or(by_tool, tool, IntegrationTier.NOT_SUPPORTED.value))


def pain_point_solution(
    pain_point: str,
    table: Optional[Mapping[str, PainPointSolution]] = None,
) -> Optional[PainPointSolution]:
    """Solution mapping for a pain point, or None if it is not catalogued."""
    table = PAIN_POINT_SOLUTIONS if table is None else table
    return lookup_or(table, pain_point, None)


def platform_name(platform_id: str) -> str:
    """Display name for a platform id, falling back to the id itself."""
    names = {p.id.value: p.display_name for p in AI_PLATFORMS}
    return lookup_or(names, str(getattr(platform_id, "value", platform_id)), str(platform_id))


def leading_platforms(department: str) -> list[PlatformId]:
    """Platforms with the highest hours-saved benchmark for a department.

    Returns every tied platform; empty for unknown departments.
    """
    by_platform = lookup_or(ROI_BENCHMARKS, department, {})
    if not by_platform:
        return []
    best = max(by_platform.values())
    return [pid for pid in PLATFORM_IDS if by_platform.get(pid.value) == best]


# =============================================================================
# Integrity
# =============================================================================


def validate_benchmark_tables(
    roi_benchmarks: Optional[Mapping[str, Mapping[str, Any]]] = None,
    pricing: Optional[Mapping[str, Any]] = None,
    compliance_data: Optional[Mapping[str, Mapping[str, str]]] = None,
    integration_support: Optional[Mapping[str, Mapping[str, str]]] = None,
    pain_point_solutions: Optional[Mapping[str, PainPointSolution]] = None,
) -> list[str]:
    """Check every table references only catalogued platforms and valid values.

    Returns:
        List of human-readable issues; empty when the tables are consistent.
    """
    roi_benchmarks = ROI_BENCHMARKS if roi_benchmarks is None else roi_benchmarks
    pricing = PLATFORM_PRICING if pricing is None else pricing
    compliance_data = COMPLIANCE_DATA if compliance_data is None else compliance_data
    integration_support = INTEGRATION_SUPPORT if integration_support is None else integration_support
    pain_point_solutions = PAIN_POINT_SOLUTIONS if pain_point_solutions is None else pain_point_solutions

    known = {pid.value for pid in PLATFORM_IDS}
    statuses = {s.value for s in ComplianceStatus}
    tiers = {t.value for t in IntegrationTier}
    issues = []

    for department, by_platform in roi_benchmarks.items():
        for pid, hours in by_platform.items():
            if pid not in known:
                issues.append(f"ROI_BENCHMARKS[{department}]: unknown platform '{pid}'")
            elif hours < 0:
                issues.append(f"ROI_BENCHMARKS[{department}][{pid}]: negative hours {hours}")

    for pid, price in pricing.items():
        if pid not in known:
            issues.append(f"PLATFORM_PRICING: unknown platform '{pid}'")
        elif price < 0:
            issues.append(f"PLATFORM_PRICING[{pid}]: negative price {price}")

    for pid, by_standard in compliance_data.items():
        if pid not in known:
            issues.append(f"COMPLIANCE_DATA: unknown platform '{pid}'")
        for standard, status in by_standard.items():
            if status not in statuses:
                issues.append(f"COMPLIANCE_DATA[{pid}][{standard}]: invalid status '{status}'")

    for pid, by_tool in integration_support.items():
        if pid not in known:
            issues.append(f"INTEGRATION_SUPPORT: unknown platform '{pid}'")
        for tool, tier in by_tool.items():
            if tier not in tiers:
                issues.append(f"INTEGRATION_SUPPORT[{pid}][{tool}]: invalid tier '{tier}'")

    for pain_point, solution in pain_point_solutions.items():
        for pid in solution.platforms:
            if str(getattr(pid, "value", pid)) not in known:
                issues.append(f"PAIN_POINT_SOLUTIONS[{pain_point}]: unknown platform '{pid}'")

    return issues
