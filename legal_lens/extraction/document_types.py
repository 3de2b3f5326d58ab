"""Closed taxonomies shared by classification, prompting and upload policy."""

LEASE_AGREEMENT = "LEASE_AGREEMENT"
EMPLOYMENT_CONTRACT = "EMPLOYMENT_CONTRACT"
PRIVACY_POLICY = "PRIVACY_POLICY"
TERMS_OF_SERVICE = "TERMS_OF_SERVICE"
NDA = "NDA"
PURCHASE_AGREEMENT = "PURCHASE_AGREEMENT"
LICENSE_AGREEMENT = "LICENSE_AGREEMENT"
PARTNERSHIP_AGREEMENT = "PARTNERSHIP_AGREEMENT"
SERVICE_AGREEMENT = "SERVICE_AGREEMENT"
LOAN_AGREEMENT = "LOAN_AGREEMENT"
FRANCHISE_AGREEMENT = "FRANCHISE_AGREEMENT"
SETTLEMENT_AGREEMENT = "SETTLEMENT_AGREEMENT"
SHAREHOLDER_AGREEMENT = "SHAREHOLDER_AGREEMENT"
MOU = "MOU"
GENERAL_LEGAL = "GENERAL_LEGAL"
NON_LEGAL = "NON_LEGAL"

# Priority order: on equal keyword hits the earlier category wins.
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (LEASE_AGREEMENT, ("lease", "rent", "tenant", "landlord", "premises")),
    (EMPLOYMENT_CONTRACT, ("employment", "employee", "employer", "work", "salary")),
    (PRIVACY_POLICY, ("privacy", "data", "personal information", "cookies")),
    (TERMS_OF_SERVICE, ("terms of service", "terms of use", "user agreement")),
    (NDA, ("non-disclosure", "confidential", "proprietary")),
    (PURCHASE_AGREEMENT, ("purchase", "sale", "buyer", "seller", "goods")),
    (LICENSE_AGREEMENT, ("license", "software", "intellectual property")),
    (
        PARTNERSHIP_AGREEMENT,
        ("partnership", "partner", "partners", "profit sharing", "capital contribution"),
    ),
    (
        SERVICE_AGREEMENT,
        ("services", "service provider", "client", "deliverables", "scope of work", "fees"),
    ),
    (
        LOAN_AGREEMENT,
        ("loan", "borrower", "lender", "interest rate", "repayment", "principal"),
    ),
    (FRANCHISE_AGREEMENT, ("franchise", "franchisor", "franchisee", "territory", "royalty")),
    (SETTLEMENT_AGREEMENT, ("settlement", "release", "claims", "waiver")),
    (
        SHAREHOLDER_AGREEMENT,
        ("shares", "shareholder", "stock", "equity", "voting rights", "dividends"),
    ),
    (MOU, ("memorandum", "understanding", "intent", "collaboration")),
)

DOCUMENT_TYPES: tuple[str, ...] = (
    *(category for category, _ in CATEGORY_KEYWORDS),
    GENERAL_LEGAL,
    NON_LEGAL,
)

SUPPORTED_MIME_TYPES: frozenset[str] = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
    "image/png",
    "image/jpeg",
    "image/tiff",
})


def is_supported_mime_type(mime_type: str) -> bool:
    """Return True if uploads of this MIME type are accepted."""
    return mime_type.split(";", 1)[0].strip().lower() in SUPPORTED_MIME_TYPES
