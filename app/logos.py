"""
Logo URLs for bills.
"""
import re
from typing import Optional

from budget.models import Bill
from .config import DEFAULT_LOGO_BASE_URL

NOISE_WORDS = re.compile(r"\b(bill|payment|service|inc|llc|corp|corporation)\b")

COMMON_DOMAINS = {
    "netflix": "netflix.com",
    "spotify": "spotify.com",
    "amazon": "amazon.com",
    "hulu": "hulu.com",
    "att": "att.com",
    "verizon": "verizon.com",
    "tmobile": "t-mobile.com",
    "comcast": "xfinity.com",
    "spectrum": "spectrum.com",
    "progressive": "progressive.com",
    "geico": "geico.com",
    "statefarm": "statefarm.com",
    "chase": "chase.com",
    "bankofamerica": "bankofamerica.com",
    "wellsfargo": "wellsfargo.com",
    "capitalone": "capitalone.com",
    "discover": "discover.com",
    "amex": "americanexpress.com",
}


def extract_domain(name: str) -> Optional[str]:
    """Guess a company domain from a bill name."""
    clean_name = NOISE_WORDS.sub("", name.lower()).strip()
    clean_name = re.sub(r"[^a-z0-9]", "", clean_name)
    if not clean_name:
        return None
    return COMMON_DOMAINS.get(clean_name, f"{clean_name}.com")


def logo_url(bill: Bill, base_url: str = DEFAULT_LOGO_BASE_URL) -> Optional[str]:
    """Logo for a bill: explicit URL, then company domain, then a guess from the name."""
    if bill.logo_url:
        return bill.logo_url
    domain = bill.company_domain or extract_domain(bill.name)
    if not domain:
        return None
    return f"{base_url.rstrip('/')}/{domain}"
