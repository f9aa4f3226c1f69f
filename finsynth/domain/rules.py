"""Ordered merchant-matching tables.

Each table is scanned top to bottom and the first rule whose keywords occur in
the merchant name wins. Matching is a case-sensitive substring test, so the
order of rules matters where keywords overlap ("Square Transfer" before
"Square", "Microsoft Azure" before "Microsoft").
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, TypeVar


@dataclass(frozen=True, slots=True)
class KeywordRule:
    """Match a merchant name by substring."""

    keywords: tuple[str, ...]

    def matches(self, merchant_name: str) -> bool:
        return any(keyword in merchant_name for keyword in self.keywords)


@dataclass(frozen=True, slots=True)
class Category:
    """Category hierarchy (most specific last) and its identifier."""

    labels: tuple[str, ...]
    category_id: str


@dataclass(frozen=True, slots=True)
class CategoryRule(KeywordRule):
    category: Category


@dataclass(frozen=True, slots=True)
class MerchantTypeRule(KeywordRule):
    bucket: str


@dataclass(frozen=True, slots=True)
class DescriptionRule(KeywordRule):
    """Brand-specific statement descriptors.

    Templates accept ``{date}``, ``{random}``, ``{location}``, ``{client}``,
    ``{service}`` and ``{brand}`` placeholders.
    """

    templates: tuple[str, ...]
    services: tuple[str, ...] = ()


RuleT = TypeVar("RuleT", bound=KeywordRule)


def first_match(rules: Iterable[RuleT], merchant_name: str) -> RuleT | None:
    """Return the first rule matching ``merchant_name``."""

    for rule in rules:
        if rule.matches(merchant_name):
            return rule
    return None


def _category(*labels: str, category_id: str) -> Category:
    return Category(labels=labels, category_id=category_id)


DEFAULT_CATEGORY = _category("Business Services", "Other", category_id="13000000")

CATEGORY_RULES: tuple[CategoryRule, ...] = (
    # Inflows
    CategoryRule(("Interest Payment",), _category("Interest", "Interest Earned", category_id="15001000")),
    CategoryRule(("Refund",), _category("Transfer", "Credit", "Refund", category_id="21005000")),
    CategoryRule(
        ("Stripe Payout", "PayPal Transfer", "Square Transfer"),
        _category("Transfer", "Third Party", "Payout", category_id="21010000"),
    ),
    CategoryRule(("Wire Transfer",), _category("Transfer", "Wire", category_id="21012000")),
    CategoryRule(
        ("Client Payment", "Customer Payment", "Invoice Payment", "ACH Deposit", "Check Deposit"),
        _category("Transfer", "Deposit", category_id="21007000"),
    ),
    # Outflows
    CategoryRule(
        ("AWS", "Azure", "Google Cloud", "Heroku", "Digital Ocean", "Cloudflare", "MongoDB Atlas"),
        _category("Business Services", "Cloud Computing", category_id="13002000"),
    ),
    CategoryRule(
        ("Facebook Ads", "Google Ads", "Instagram Ads", "LinkedIn", "Mailchimp", "Marketing"),
        _category("Business Services", "Advertising", "Digital Marketing", category_id="13001000"),
    ),
    CategoryRule(
        (
            "Microsoft 365",
            "Google Workspace",
            "Zoom",
            "Adobe",
            "Slack",
            "GitHub",
            "JetBrains",
            "Atlassian",
            "Asana",
            "QuickBooks",
            "DataDog",
            "New Relic",
            "Twilio",
            "SendGrid",
            "Docker",
            "Bloomberg Terminal",
            "Software",
        ),
        _category("Business Services", "Software", "Subscriptions", category_id="13009000"),
    ),
    CategoryRule(
        ("Staples", "Office Depot", "Amazon Business", "Office Snacks", "Coffee Service"),
        _category("Shops", "Office Supplies", category_id="19043000"),
    ),
    CategoryRule(
        ("UPS", "FedEx", "USPS", "Shipping"),
        _category("Business Services", "Shipping", "Courier", category_id="13004000"),
    ),
    CategoryRule(("Electric", "Water", "Gas", "Utility"), _category("Service", "Utilities", category_id="18068000")),
    CategoryRule(
        ("Verizon", "AT&T", "Comcast", "Internet"),
        _category("Service", "Telecommunication Services", category_id="18063000"),
    ),
    CategoryRule(
        ("Rent", "Lease", "Leasing", "WeWork", "Facilities"),
        _category("Business Services", "Real Estate", category_id="13011000"),
    ),
    CategoryRule(("Insurance",), _category("Service", "Insurance", category_id="18030000")),
    CategoryRule(
        ("Legal", "Accounting", "Consulting", "Payroll", "IT Support", "Cybersecurity"),
        _category("Business Services", "Professional Services", category_id="13005000"),
    ),
    CategoryRule(
        ("License", "Filing Fee", "Accreditation", "Dues"),
        _category("Government", "Fees and Licenses", category_id="12008000"),
    ),
    CategoryRule(
        ("Airlines", "Air Lines", "Hotel", "Marriott", "Hilton", "Uber", "Lyft"),
        _category("Travel", "Business Travel", category_id="22001000"),
    ),
    CategoryRule(
        ("Coursera", "Udemy", "Certifications", "Training", "Conference"),
        _category("Service", "Education", category_id="18018000"),
    ),
)

MERCHANT_TYPE_RULES: tuple[MerchantTypeRule, ...] = (
    MerchantTypeRule(("AWS", "Azure", "Google Cloud", "Heroku", "Digital Ocean", "Cloudflare", "MongoDB"), "cloud"),
    MerchantTypeRule(("Ads", "Marketing", "LinkedIn", "Mailchimp"), "marketing"),
    MerchantTypeRule(
        (
            "Software",
            "Microsoft 365",
            "Google Workspace",
            "Zoom",
            "Adobe",
            "Slack",
            "GitHub",
            "JetBrains",
            "Atlassian",
            "Asana",
            "QuickBooks",
            "DataDog",
            "New Relic",
            "Twilio",
            "SendGrid",
            "Docker",
        ),
        "software",
    ),
    MerchantTypeRule(("Staples", "Office Depot", "Amazon Business", "Snacks", "Coffee", "Supplies"), "office"),
    MerchantTypeRule(("Electric", "Water", "Gas", "Utility", "Verizon", "AT&T", "Comcast"), "utilities"),
    MerchantTypeRule(("Rent", "Lease", "Leasing", "WeWork"), "rent"),
    MerchantTypeRule(("Insurance", "Health"), "insurance"),
    # No dedicated price table; falls through to the default band.
    MerchantTypeRule(("Airlines", "Air Lines", "Marriott", "Hilton", "Uber", "Lyft"), "travel"),
)
DEFAULT_MERCHANT_BUCKET = "default"

DESCRIPTION_RULES: tuple[DescriptionRule, ...] = (
    # Inflows
    DescriptionRule(("Client Payment", "Customer Payment"), ("ACH CREDIT {client} {random}", "DEPOSIT {client} PMT {date}")),
    DescriptionRule(("Invoice Payment",), ("INVOICE PMT {client} INV-{random}",)),
    DescriptionRule(("Wire Transfer",), ("WIRE TRANSFER IN {client} REF {random}", "INCOMING WIRE {client}")),
    DescriptionRule(("ACH Deposit",), ("ACH DEPOSIT {client} {random}",)),
    DescriptionRule(("Check Deposit",), ("MOBILE CHECK DEPOSIT {random}", "REMOTE DEPOSIT {date}")),
    DescriptionRule(("Stripe",), ("STRIPE TRANSFER ST-{random}",)),
    DescriptionRule(("PayPal",), ("PAYPAL TRANSFER {random}",)),
    DescriptionRule(("Square Transfer",), ("SQUARE INC DEP {random}",)),
    DescriptionRule(("Refund",), ("MERCHANT REFUND {random}", "RETURN CREDIT {date}")),
    DescriptionRule(("Interest Payment",), ("INTEREST PAYMENT {date}",)),
    # Outflows
    DescriptionRule(("AWS",), ("AMZN*AWS {location}", "AWS*BILLING {random}")),
    DescriptionRule(("Amazon",), ("AMZN MKTP US*{random}", "AMZN*{service} {location}"), ("BUSINESS", "SERVICES")),
    DescriptionRule(("Microsoft Azure",), ("MSFT*AZURE {location}",)),
    DescriptionRule(("Microsoft",), ("MSFT*{service} {location}",), ("M365", "365 BUSINESS")),
    DescriptionRule(("Google Cloud",), ("GOOGLE*CLOUD {random}",)),
    DescriptionRule(("Google Ads",), ("GOOGLE*ADS{random}",)),
    DescriptionRule(("Google",), ("GOOGLE*{service}",), ("GSUITE", "WORKSPACE")),
    DescriptionRule(("Adobe",), ("ADOBE*{service}",), ("CREATIVE CLD", "ACROPRO SUBS")),
    DescriptionRule(("Slack",), ("SLACK.COM",)),
    DescriptionRule(("GitHub",), ("GITHUB.COM",)),
    DescriptionRule(("Heroku",), ("HEROKU.COM",)),
    DescriptionRule(("Shopify",), ("SHOPIFY*MONTHLY", "SHOPIFY* {random}")),
    DescriptionRule(("Square",), ("SQ*SQUARE",)),
    DescriptionRule(("UPS",), ("UPS*SHIPPING", "UPS*{random}")),
    DescriptionRule(("FedEx",), ("FEDEX*SHIPPING", "FEDEX {random}")),
    DescriptionRule(("Zoom",), ("ZOOM.US",)),
    DescriptionRule(("LinkedIn",), ("LINKEDIN*PREMIUM", "LINKEDIN*{random}")),
    DescriptionRule(("Uber",), ("UBER *TRIP {date}",)),
    DescriptionRule(("Lyft",), ("LYFT *RIDE {date}",)),
    DescriptionRule(("Marriott", "Hilton"), ("{brand} HOTELS {location}",)),
    DescriptionRule(("Airlines", "Air Lines"), ("{brand} AIR {random}",)),
    DescriptionRule(("Insurance",), ("{brand} INS PREM {random}", "{brand} INS")),
    DescriptionRule(("Water",), ("{location} WATER UTIL",)),
    DescriptionRule(("Electric", "Utility"), ("{location} POWER & LIGHT",)),
    DescriptionRule(("Commercial Rent",), ("COMMERCIAL RENT {location}",)),
    DescriptionRule(("Janitorial",), ("CLEAN SVCS INC",)),
    DescriptionRule(("Coffee",), ("OFFICE COFFEE SVC",)),
    DescriptionRule(("Snacks",), ("SNACK DELIVERY SVC",)),
    DescriptionRule(("Legal",), ("LEGAL COUNSEL LLC",)),
    DescriptionRule(("Accounting",), ("ACCT SERVICES INC",)),
)

# Merchants billed online get a country-only location.
ONLINE_MERCHANT_KEYWORDS = KeywordRule(
    ("AWS", "Azure", "Cloud", "Software", "Digital", "Subscription", "Online", ".com", "Stripe", "PayPal")
)

# Merchants paid by card at a physical site, used for payment_channel.
IN_STORE_MERCHANT_KEYWORDS = KeywordRule(
    ("Staples", "Office Depot", "Hotel", "Marriott", "Hilton", "Supplies", "Equipment", "Entertainment")
)


def categorize(merchant_name: str) -> Category:
    """Classify a merchant; a pure function of the name."""

    rule = first_match(CATEGORY_RULES, merchant_name)
    return rule.category if rule else DEFAULT_CATEGORY


def merchant_bucket(merchant_name: str) -> str:
    """Bucket used to look up payment price bands."""

    rule = first_match(MERCHANT_TYPE_RULES, merchant_name)
    return rule.bucket if rule else DEFAULT_MERCHANT_BUCKET


def description_rule_for(merchant_name: str) -> DescriptionRule | None:
    return first_match(DESCRIPTION_RULES, merchant_name)
