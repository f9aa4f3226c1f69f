"""Static catalogs that drive the synthetic data generator.

Everything here is plain data plus read-only lookups. Lookups never raise on
an unknown key; they fall back to a default entry instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, slots=True)
class SizeTier:
    """Company size bucket with its employee bounds and scaling index."""

    label: str
    min_employees: int
    max_employees: int
    index: int


@dataclass(frozen=True, slots=True)
class AccountDistribution:
    """How many accounts of each kind a company of a given tier holds."""

    checking: int
    savings: int
    credit: int
    investment: int
    loan: int

    @property
    def total(self) -> int:
        return self.checking + self.savings + self.credit + self.investment + self.loan


@dataclass(frozen=True, slots=True)
class BankProducts:
    """Business product names offered by a bank."""

    name: str
    checking: tuple[str, ...]
    savings: tuple[str, ...]
    credit_cards: tuple[str, ...]
    loans: tuple[str, ...]
    routing_number_prefixes: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DepositShape:
    """Shape of deposit amounts inside a tier band.

    ``exponent`` skews draws inside the band: values above 1 push towards the
    low end (many small receipts), values below 1 towards the high end
    (fewer, larger project payments). With ``burst_probability`` a deposit is
    scaled up by ``burst_multiplier`` to model the occasional large receipt.
    """

    exponent: float
    burst_probability: float
    burst_multiplier: float


COMPANY_SIZES: Mapping[str, SizeTier] = MappingProxyType(
    {
        tier.label: tier
        for tier in (
            SizeTier("Startup (1-10)", 1, 10, 0),
            SizeTier("Small (11-50)", 11, 50, 1),
            SizeTier("Medium (51-200)", 51, 200, 2),
            SizeTier("Large (201-1000)", 201, 1000, 3),
            SizeTier("Enterprise (1000+)", 1001, 50000, 4),
        )
    }
)

INDUSTRIES: tuple[str, ...] = (
    "Technology",
    "Retail",
    "Healthcare",
    "Financial Services",
    "Manufacturing",
    "Consulting",
    "Real Estate",
    "Education",
    "Hospitality",
    "Media & Entertainment",
)

BUSINESS_MODELS: tuple[str, ...] = (
    "B2B",
    "B2C",
    "B2B2C",
    "D2C",
    "Marketplace",
    "SaaS",
    "Subscription",
)

# Revenue per tier before the industry multiplier is applied.
BASE_REVENUES: tuple[int, ...] = (500_000, 2_000_000, 10_000_000, 50_000_000, 200_000_000)

INDUSTRY_REVENUE_MULTIPLIERS: Mapping[str, float] = MappingProxyType(
    {
        "Technology": 1.5,
        "Financial Services": 1.8,
        "Healthcare": 1.2,
        "Retail": 0.7,
        "Manufacturing": 1.0,
        "Consulting": 1.3,
        "Real Estate": 1.4,
        "Education": 0.6,
        "Hospitality": 0.5,
        "Media & Entertainment": 1.1,
    }
)

COMPANY_NAME_PREFIXES: tuple[str, ...] = (
    "Tech",
    "Global",
    "Advanced",
    "Premier",
    "Elite",
    "Smart",
    "Innovative",
    "Quantum",
    "Stellar",
    "Cosmic",
    "Apex",
    "Nova",
    "Omni",
    "Peak",
    "Prime",
)

COMPANY_NAME_SUFFIXES: tuple[str, ...] = (
    "Solutions",
    "Systems",
    "Technologies",
    "Group",
    "Partners",
    "Enterprises",
    "Industries",
    "Networks",
    "Dynamics",
    "Ventures",
    "Labs",
    "Hub",
    "AI",
    "Tech",
    "Connect",
)

FOUNDING_YEAR_RANGE: tuple[int, int] = (1980, 2023)

ACCOUNT_DISTRIBUTION: Mapping[str, AccountDistribution] = MappingProxyType(
    {
        "Startup (1-10)": AccountDistribution(checking=1, savings=1, credit=1, investment=0, loan=0),
        "Small (11-50)": AccountDistribution(checking=1, savings=1, credit=2, investment=1, loan=0),
        "Medium (51-200)": AccountDistribution(checking=2, savings=1, credit=2, investment=1, loan=1),
        "Large (201-1000)": AccountDistribution(checking=2, savings=2, credit=3, investment=2, loan=1),
        "Enterprise (1000+)": AccountDistribution(checking=3, savings=2, credit=4, investment=3, loan=3),
    }
)
FALLBACK_DISTRIBUTION_SIZE = "Small (11-50)"

ACCOUNT_TYPES: tuple[str, ...] = ("depository", "credit", "loan", "investment", "other")

ACCOUNT_SUBTYPES: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "depository": frozenset(
            {"checking", "savings", "hsa", "cd", "money market", "paypal", "prepaid"}
        ),
        "credit": frozenset({"credit card", "paypal", "line of credit"}),
        "loan": frozenset(
            {
                "auto",
                "business",
                "commercial",
                "construction",
                "consumer",
                "home equity",
                "line of credit",
                "loan",
                "mortgage",
                "overdraft",
                "student",
            }
        ),
        "investment": frozenset(
            {
                "401a",
                "401k",
                "403b",
                "457b",
                "529",
                "brokerage",
                "ira",
                "mutual fund",
                "pension",
                "retirement",
                "roth",
                "roth 401k",
                "sep ira",
                "simple ira",
                "trust",
            }
        ),
        "other": frozenset({"other"}),
    }
)

INVESTMENT_SUBTYPE_CYCLE: tuple[str, ...] = ("brokerage", "401k", "ira", "roth")
LOAN_SUBTYPE_CYCLE: tuple[str, ...] = ("line of credit", "commercial", "construction", "mortgage")

# Share of annual revenue owed per loan subtype, as (low, high).
LOAN_REVENUE_SHARE: Mapping[str, tuple[float, float]] = MappingProxyType(
    {
        "line of credit": (0.1, 0.4),
        "commercial": (0.5, 1.5),
        "construction": (0.3, 1.0),
        "mortgage": (1.0, 3.0),
    }
)
DEFAULT_LOAN_REVENUE_SHARE: tuple[float, float] = (0.2, 0.8)

BANK_PRODUCTS: Mapping[str, BankProducts] = MappingProxyType(
    {
        bank.name: bank
        for bank in (
            BankProducts(
                name="Chase",
                checking=("Business Complete Checking", "Performance Business Checking", "Platinum Business Checking"),
                savings=("Business Premier Savings", "Business Total Savings"),
                credit_cards=("Ink Business Preferred", "Ink Business Cash", "Ink Business Unlimited"),
                loans=("SBA Loans", "Business Lines of Credit", "Commercial Real Estate Loans"),
                routing_number_prefixes=("021", "267", "322", "325"),
            ),
            BankProducts(
                name="Bank of America",
                checking=("Business Advantage Fundamentals", "Business Advantage Relationship"),
                savings=("Business Advantage Savings", "Business Investment Account"),
                credit_cards=("Business Advantage Cash Rewards", "Business Advantage Travel Rewards"),
                loans=("Business Advantage Term Loans", "Business Advantage Line of Credit"),
                routing_number_prefixes=("051", "053", "063", "121"),
            ),
            BankProducts(
                name="Wells Fargo",
                checking=("Initiate Business Checking", "Navigate Business Checking", "Optimize Business Checking"),
                savings=("Business Market Rate Savings", "Business Platinum Savings"),
                credit_cards=("Business Platinum", "Business Elite", "Business Secured"),
                loans=("Equipment Express Loan", "BusinessLoan Term Loan", "FastFlex Small Business Loan"),
                routing_number_prefixes=("121", "122", "123", "125"),
            ),
            BankProducts(
                name="Citibank",
                checking=("CitiBusiness Streamlined Checking", "CitiBusiness Flexible Checking"),
                savings=("CitiBusiness Savings", "CitiBusiness Insured Money Market Account"),
                credit_cards=("Costco Anywhere Visa Business", "CitiBusiness AAdvantage Platinum Select"),
                loans=("Commercial Mortgages", "Term Loans", "SBA Loans"),
                routing_number_prefixes=("021", "031", "271", "321"),
            ),
            BankProducts(
                name="Capital One",
                checking=("Basic Business Checking", "Unlimited Business Checking"),
                savings=("Business Advantage Savings", "Business Money Market Account"),
                credit_cards=("Spark Cash Plus", "Spark Cash Select", "Spark Miles"),
                loans=("Small Business Loans", "Business Installment Loans", "Lines of Credit"),
                routing_number_prefixes=("051", "056", "065", "255"),
            ),
            BankProducts(
                name="TD Bank",
                checking=("Business Convenience Checking", "Business Value Checking", "Business Premier Checking"),
                savings=("Business Savings", "Business Money Market"),
                credit_cards=("Business Solutions", "Business Convenience Plus", "Business Premier"),
                loans=("Small Business Loans", "Business Lines of Credit", "Equipment Financing"),
                routing_number_prefixes=("011", "031", "036", "053"),
            ),
            BankProducts(
                name="PNC Bank",
                checking=("Business Checking", "Business Checking Plus", "Analysis Business Checking"),
                savings=("Standard Business Savings", "Premiere Business Money Market"),
                credit_cards=("PNC Cash Rewards Visa", "PNC Points Visa", "PNC Visa Business"),
                loans=("Term Loans", "Equipment Loans", "SBA Loans"),
                routing_number_prefixes=("031", "041", "043", "071"),
            ),
            BankProducts(
                name="US Bank",
                checking=("Silver Business Checking", "Gold Business Checking", "Platinum Business Checking"),
                savings=("Business Savings", "Business Premium Money Market"),
                credit_cards=("Business Leverage Visa", "Business Cash Rewards", "Business Platinum"),
                loans=("Quick Loan", "Lines of Credit", "Practice Financing"),
                routing_number_prefixes=("041", "042", "081", "082"),
            ),
        )
    }
)
BANK_NAMES: tuple[str, ...] = tuple(BANK_PRODUCTS)

COMMON_VENDORS: tuple[str, ...] = (
    "Amazon Business",
    "Staples",
    "Office Depot",
    "UPS",
    "FedEx",
    "USPS",
    "Microsoft 365",
    "Google Workspace",
    "QuickBooks",
    "Zoom",
    "Adobe",
    "Verizon",
    "AT&T",
    "Comcast Business",
    "Electric Company",
    "Water Utility",
    "Commercial Rent",
    "Janitorial Services",
    "City Business License",
    "State Filing Fee",
    "HR Software",
    "Payroll Services",
    "Health Insurance",
    "Office Snacks",
    "Coffee Service",
    "IT Support",
    "Cybersecurity Services",
    "Legal Services",
    "Accounting Services",
)

INDUSTRY_VENDORS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "Technology": (
            "AWS",
            "Microsoft Azure",
            "Google Cloud",
            "Adobe Creative Cloud",
            "Slack",
            "GitHub",
            "JetBrains",
            "Digital Ocean",
            "Mailchimp",
            "Asana",
            "Atlassian",
            "MongoDB Atlas",
            "Heroku",
            "Cloudflare",
            "Twilio",
            "SendGrid",
            "New Relic",
            "DataDog",
            "Docker",
        ),
        "Retail": (
            "Shopify",
            "Square",
            "Inventory Management Software",
            "Point of Sale System",
            "Shopping Bags Supplier",
            "Store Fixtures",
            "Facebook Ads",
            "Google Ads",
            "Instagram Ads",
            "Packaging Suppliers",
            "Shopping Malls Ltd",
            "Display Fixtures Co",
            "Visual Merchandising Inc",
            "Retail Space Leasing",
            "Security Systems",
        ),
        "Healthcare": (
            "Electronic Health Records",
            "Medical Suppliers Co",
            "Insurance Providers",
            "Medical Equipment Corp",
            "Healthcare Software Inc",
            "Sterilization Services",
            "Professional Medical Associations",
            "Pharmaceutical Distributors",
            "Lab Testing Services",
            "Patient Management Systems",
            "Medical Waste Disposal",
            "Compliance Training",
        ),
        "Financial Services": (
            "Bloomberg Terminal",
            "Thomson Reuters",
            "Financial Information Exchange",
            "Trading Software",
            "Compliance Systems",
            "Risk Management Software",
            "Financial Planning Software",
            "Payment Processors",
            "Credit Bureau Services",
            "Investment Research Tools",
            "Anti-Money Laundering Software",
        ),
        "Manufacturing": (
            "Steel Suppliers Inc",
            "Machinery Parts Co",
            "Factory Equipment Ltd",
            "Industrial Supplies",
            "Shipping Partners",
            "Packaging Solutions",
            "Maintenance Services",
            "Quality Control Systems",
            "Raw Materials Distributors",
            "Warehouse Leasing",
            "Forklift Rentals",
            "Safety Equipment",
        ),
        "Consulting": (
            "American Airlines",
            "Delta Air Lines",
            "Marriott",
            "Hilton",
            "Uber",
            "Lyft",
            "Coursera",
            "Udemy",
            "WeWork",
            "Professional Certifications",
            "LinkedIn Premium",
            "Conference Registration",
            "Professional Association Dues",
            "Client Entertainment",
        ),
        "Real Estate": (
            "Property Management Software",
            "Listing Services",
            "CRM for Real Estate",
            "Professional Photography",
            "Virtual Tour Software",
            "Home Inspection Services",
            "Title Insurance",
            "Real Estate Marketing Services",
            "Landscaping Services",
            "Renovation Contractors",
        ),
        "Education": (
            "Learning Management System",
            "Textbook Publishers",
            "Educational Software",
            "Library Resources",
            "Student Information System",
            "Campus Management Software",
            "Educational Assessment Tools",
            "Online Learning Platforms",
            "Student Recruitment Services",
            "Accreditation Fees",
        ),
        "Hospitality": (
            "Booking Software",
            "Hotel Supplies",
            "Food Suppliers",
            "Beverage Distributors",
            "Linen Services",
            "Cleaning Services",
            "Reservation Systems",
            "Point of Sale for Restaurants",
            "Guest Amenities",
            "Entertainment Services",
        ),
        "Media & Entertainment": (
            "Adobe Creative Cloud",
            "Camera Equipment",
            "Audio Equipment",
            "Editing Software",
            "Stock Media Services",
            "Talent Agencies",
            "Production Insurance",
            "Streaming Services",
            "Licensing Fees",
            "Studio Rentals",
        ),
    }
)

# Industry vendors are drawn twice as often as the shared pool.
INDUSTRY_VENDOR_WEIGHT = 2
COMMON_VENDOR_WEIGHT = 1

DEPOSIT_SOURCES: tuple[str, ...] = (
    "Client Payment",
    "Customer Payment",
    "Invoice Payment",
    "Wire Transfer",
    "ACH Deposit",
    "Check Deposit",
    "Square Transfer",
    "Stripe Payout",
    "PayPal Transfer",
    "Refund",
    "Interest Payment",
)

CLIENT_NAMES: tuple[str, ...] = (
    "Riverside Hotels",
    "City Council",
    "Orion Retail",
    "Bright Schools",
    "Lumen Health",
    "Vertex Labs",
    "Horizon Logistics",
    "Zenith Media",
    "Orbit Foods",
    "Nimbus Software",
    "Summit Partners",
    "Cedar Holdings",
)

STATE_CODES: tuple[str, ...] = ("NY", "CA", "TX", "IL", "FL", "WA", "MA", "CO", "GA", "OR")

# (city, region, postal code) used for in-person merchant locations.
MERCHANT_CITIES: tuple[tuple[str, str, str], ...] = (
    ("New York", "NY", "10001"),
    ("Los Angeles", "CA", "90001"),
    ("Chicago", "IL", "60007"),
    ("Houston", "TX", "77001"),
    ("Phoenix", "AZ", "85001"),
    ("Philadelphia", "PA", "19019"),
    ("San Antonio", "TX", "78201"),
    ("San Diego", "CA", "92101"),
    ("Dallas", "TX", "75201"),
    ("San Jose", "CA", "95101"),
)

TRANSACTION_BASE_COUNTS: tuple[int, ...] = (50, 150, 400, 800, 1500)

# Deposit band per tier, as (min, max).
DEPOSIT_RANGES: tuple[tuple[int, int], ...] = (
    (500, 5_000),
    (1_000, 20_000),
    (5_000, 50_000),
    (10_000, 200_000),
    (50_000, 500_000),
)

# Payment band per merchant bucket and tier, as positive (min, max); the
# generator negates the draw.
PAYMENT_RANGES: Mapping[str, tuple[tuple[float, float], ...]] = MappingProxyType(
    {
        "default": ((50, 2_000), (100, 5_000), (500, 20_000), (1_000, 50_000), (5_000, 100_000)),
        "cloud": ((75, 2_000), (150, 5_000), (750, 20_000), (1_500, 50_000), (7_500, 100_000)),
        "software": ((10, 500), (50, 2_000), (200, 8_000), (500, 20_000), (2_000, 60_000)),
        "office": ((20, 800), (50, 2_000), (150, 6_000), (400, 15_000), (1_000, 40_000)),
        "utilities": ((100, 900), (250, 2_500), (800, 8_000), (2_500, 25_000), (8_000, 80_000)),
        "marketing": ((100, 3_000), (250, 8_000), (1_000, 30_000), (2_500, 75_000), (10_000, 150_000)),
        "rent": ((150, 4_000), (300, 10_000), (1_500, 40_000), (3_000, 100_000), (15_000, 200_000)),
        "insurance": ((100, 2_000), (200, 5_000), (1_000, 20_000), (2_000, 50_000), (10_000, 100_000)),
    }
)

DEPOSIT_SHAPES: Mapping[str, DepositShape] = MappingProxyType(
    {
        "recurring": DepositShape(exponent=2.5, burst_probability=0.05, burst_multiplier=4.0),
        "project": DepositShape(exponent=0.6, burst_probability=0.0, burst_multiplier=1.0),
        "balanced": DepositShape(exponent=1.0, burst_probability=0.02, burst_multiplier=2.0),
    }
)

BUSINESS_MODEL_DEPOSIT_SHAPE: Mapping[str, str] = MappingProxyType(
    {
        "SaaS": "recurring",
        "Subscription": "recurring",
        "Marketplace": "recurring",
        "D2C": "recurring",
        "B2C": "recurring",
        "B2B": "project",
        "B2B2C": "balanced",
    }
)

# Industries whose revenue is project-based regardless of business model.
PROJECT_BASED_INDUSTRIES: frozenset[str] = frozenset({"Consulting"})


def size_tier_for(company_size: str | None) -> SizeTier:
    """Return the tier for a size label, defaulting to the smallest tier."""

    tier = COMPANY_SIZES.get(company_size or "")
    if tier is None:
        return next(iter(COMPANY_SIZES.values()))
    return tier


def account_distribution_for(company_size: str | None) -> AccountDistribution:
    """Return the account mix for a size label, defaulting to the Small mix."""

    return ACCOUNT_DISTRIBUTION.get(company_size or "", ACCOUNT_DISTRIBUTION[FALLBACK_DISTRIBUTION_SIZE])


def vendors_for(industry: str | None) -> tuple[str, ...]:
    """Industry-specific vendors; empty for an unknown industry."""

    return INDUSTRY_VENDORS.get(industry or "", ())


def bank_products_for(bank_name: str) -> BankProducts | None:
    return BANK_PRODUCTS.get(bank_name)


def revenue_multiplier_for(industry: str | None) -> float:
    return INDUSTRY_REVENUE_MULTIPLIERS.get(industry or "", 1.0)


def payment_range_for(bucket: str, tier_index: int) -> tuple[float, float]:
    """Payment band for a merchant bucket, using the default table on a miss."""

    ranges = PAYMENT_RANGES.get(bucket, PAYMENT_RANGES["default"])
    index = min(max(tier_index, 0), len(ranges) - 1)
    return ranges[index]


def deposit_range_for(tier_index: int) -> tuple[int, int]:
    index = min(max(tier_index, 0), len(DEPOSIT_RANGES) - 1)
    return DEPOSIT_RANGES[index]


def deposit_shape_for(business_model: str | None, industry: str | None = None) -> DepositShape:
    """Deposit skew for a company; project-based industries override the model."""

    if industry in PROJECT_BASED_INDUSTRIES:
        return DEPOSIT_SHAPES["project"]
    key = BUSINESS_MODEL_DEPOSIT_SHAPE.get(business_model or "", "balanced")
    return DEPOSIT_SHAPES[key]


def subtypes_for(account_type: str) -> frozenset[str]:
    return ACCOUNT_SUBTYPES.get(account_type, frozenset())

