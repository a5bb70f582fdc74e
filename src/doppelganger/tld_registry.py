"""
WHOIS server registry.

Static mapping of public suffixes to the registry WHOIS servers that answer
queries for them, covering:
- Generic TLDs (gTLDs): .com, .net, .org, .info, etc.
- Country Code TLDs (ccTLDs): .de, .uk, .fr, .jp, etc.
- New gTLDs: .app, .dev, .io, .xyz, etc.

Suffixes missing from the table are resolved at runtime through the IANA
root WHOIS server (see WHOISClient).
"""

from typing import Optional

# Root WHOIS server that refers queries to the registry of each TLD
IANA_WHOIS_SERVER = "whois.iana.org"

WHOIS_PORT = 43

# GENERIC TLDs (gTLDs)
GENERIC_TLDS = {
    "com": "whois.verisign-grs.com",
    "net": "whois.verisign-grs.com",
    "org": "whois.pir.org",
    "info": "whois.afilias.net",
    "biz": "whois.nic.biz",
    "name": "whois.nic.name",
    "mobi": "whois.afilias.net",
    "pro": "whois.afilias.net",
}


# NEW gTLDs - Tech & Startup
TECH_TLDS = {
    "io": "whois.nic.io",
    "co": "whois.nic.co",
    "app": "whois.nic.google",
    "dev": "whois.nic.google",
    "ai": "whois.nic.ai",
    "tech": "whois.centralnic.com",
    "cloud": "whois.nic.cloud",
    "digital": "whois.donuts.co",
    "software": "whois.donuts.co",
    "systems": "whois.donuts.co",
    "network": "whois.donuts.co",
    "solutions": "whois.donuts.co",
    "agency": "whois.donuts.co",
    "studio": "whois.donuts.co",
    "design": "whois.centralnic.com",
    "media": "whois.donuts.co",
}


# NEW gTLDs - Popular & Generic
POPULAR_NEW_TLDS = {
    "xyz": "whois.nic.xyz",
    "online": "whois.centralnic.com",
    "site": "whois.centralnic.com",
    "store": "whois.centralnic.com",
    "shop": "whois.nic.shop",
    "club": "whois.nic.club",
    "live": "whois.donuts.co",
    "life": "whois.donuts.co",
    "world": "whois.donuts.co",
    "today": "whois.donuts.co",
    "space": "whois.centralnic.com",
    "fun": "whois.centralnic.com",
    "top": "whois.nic.top",
    "vip": "whois.nic.vip",
    "one": "whois.nic.one",
    "blog": "whois.nic.blog",
    "news": "whois.donuts.co",
    "email": "whois.donuts.co",
    "link": "whois.uniregistry.net",
    "click": "whois.uniregistry.net",
}


# EUROPEAN ccTLDs
EUROPE_TLDS = {
    "de": "whois.denic.de",
    "eu": "whois.eu",
    "at": "whois.nic.at",
    "ch": "whois.nic.ch",
    "li": "whois.nic.li",
    "nl": "whois.sidn.nl",
    "be": "whois.dns.be",
    "fr": "whois.nic.fr",
    "it": "whois.nic.it",
    "es": "whois.nic.es",
    "pt": "whois.dns.pt",
    "pl": "whois.dns.pl",
    "cz": "whois.nic.cz",
    "sk": "whois.sk-nic.sk",
    "hu": "whois.nic.hu",
    "ro": "whois.rotld.ro",
    "bg": "whois.register.bg",
    "hr": "whois.dns.hr",
    "si": "whois.register.si",
    "rs": "whois.rnids.rs",
    "gr": "whois.ics.forth.gr",
    "tr": "whois.nic.tr",
}


# NORDIC ccTLDs
NORDIC_TLDS = {
    "se": "whois.iis.se",
    "dk": "whois.dk-hostmaster.dk",
    "no": "whois.norid.no",
    "fi": "whois.fi",
    "is": "whois.isnic.is",
}

# UK & IRELAND
UK_TLDS = {
    "uk": "whois.nic.uk",
    "co.uk": "whois.nic.uk",
    "org.uk": "whois.nic.uk",
    "me.uk": "whois.nic.uk",
    "ie": "whois.iedr.ie",
}

# AMERICAS
AMERICAS_TLDS = {
    "us": "whois.nic.us",
    "ca": "whois.cira.ca",
    "mx": "whois.mx",
    "br": "whois.registro.br",
    "ar": "whois.nic.ar",
    "cl": "whois.nic.cl",
    "co": "whois.nic.co",
    "pe": "kero.yachay.pe",
}


# ASIA PACIFIC
ASIA_PACIFIC_TLDS = {
    "au": "whois.auda.org.au",
    "com.au": "whois.auda.org.au",
    "nz": "whois.srs.net.nz",
    "jp": "whois.jprs.jp",
    "cn": "whois.cnnic.cn",
    "hk": "whois.hkirc.hk",
    "tw": "whois.twnic.net.tw",
    "kr": "whois.kr",
    "in": "whois.registry.in",
    "sg": "whois.sgnic.sg",
    "my": "whois.mynic.my",
    "th": "whois.thnic.co.th",
    "id": "whois.id",
    "ph": "whois.dot.ph",
    "vn": "whois.vnnic.vn",
}

# MIDDLE EAST & AFRICA
MEA_TLDS = {
    "ae": "whois.aeda.net.ae",
    "sa": "whois.nic.net.sa",
    "il": "whois.isoc.org.il",
    "za": "whois.registry.net.za",
    "ng": "whois.nic.net.ng",
    "ke": "whois.kenic.or.ke",
    "eg": "whois.ripe.net",
    "ma": "whois.registre.ma",
}


# EASTERN EUROPE & CIS
CIS_TLDS = {
    "ru": "whois.tcinet.ru",
    "ua": "whois.ua",
    "by": "whois.cctld.by",
    "kz": "whois.nic.kz",
    "uz": "whois.cctld.uz",
}

# SPECIAL / POPULAR ALTERNATIVE TLDs
SPECIAL_TLDS = {
    "me": "whois.nic.me",
    "tv": "whois.nic.tv",
    "cc": "ccwhois.verisign-grs.com",
    "ws": "whois.website.ws",
    "fm": "whois.nic.fm",
    "gg": "whois.gg",
    "to": "whois.tonic.to",
    "la": "whois.nic.la",
    "ly": "whois.nic.ly",
    "vc": "whois.afilias-grs.info",
    "gl": "whois.nic.gl",
    "im": "whois.nic.im",
    "sh": "whois.nic.sh",
    "ac": "whois.nic.ac",
}


# BUSINESS & PROFESSIONAL
BUSINESS_TLDS = {
    "company": "whois.donuts.co",
    "business": "whois.donuts.co",
    "consulting": "whois.donuts.co",
    "services": "whois.donuts.co",
    "group": "whois.donuts.co",
    "team": "whois.donuts.co",
    "work": "whois.centralnic.com",
    "jobs": "whois.nic.jobs",
    "careers": "whois.donuts.co",
    "finance": "whois.donuts.co",
    "money": "whois.donuts.co",
    "capital": "whois.donuts.co",
    "ventures": "whois.donuts.co",
    "holdings": "whois.donuts.co",
    "partners": "whois.donuts.co",
    "legal": "whois.donuts.co",
    "law": "whois.nic.law",
    "tax": "whois.donuts.co",
    "accountant": "whois.nic.accountant",
    "insurance": "whois.nic.insurance",
}


# LIFESTYLE & ENTERTAINMENT
LIFESTYLE_TLDS = {
    "art": "whois.nic.art",
    "music": "whois.nic.music",
    "video": "whois.donuts.co",
    "photo": "whois.uniregistry.net",
    "photography": "whois.donuts.co",
    "gallery": "whois.donuts.co",
    "fashion": "whois.centralnic.com",
    "style": "whois.donuts.co",
    "fitness": "whois.donuts.co",
    "health": "whois.nic.health",
    "yoga": "whois.centralnic.com",
    "travel": "whois.nic.travel",
    "holiday": "whois.donuts.co",
    "restaurant": "whois.donuts.co",
    "cafe": "whois.donuts.co",
    "bar": "whois.donuts.co",
    "beer": "whois.centralnic.com",
    "wine": "whois.donuts.co",
    "pizza": "whois.donuts.co",
    "game": "whois.uniregistry.net",
    "games": "whois.donuts.co",
    "casino": "whois.donuts.co",
    "bet": "whois.afilias.net",
}


# REAL ESTATE & PROPERTY
REALESTATE_TLDS = {
    "house": "whois.donuts.co",
    "homes": "whois.nic.homes",
    "property": "whois.uniregistry.net",
    "properties": "whois.donuts.co",
    "land": "whois.donuts.co",
    "estate": "whois.donuts.co",
    "apartments": "whois.donuts.co",
    "rent": "whois.nic.rent",
}

# EDUCATION & COMMUNITY
EDUCATION_TLDS = {
    "edu": "whois.educause.edu",
    "academy": "whois.donuts.co",
    "school": "whois.donuts.co",
    "university": "whois.donuts.co",
    "college": "whois.nic.college",
    "training": "whois.donuts.co",
    "courses": "whois.nic.courses",
    "community": "whois.donuts.co",
    "social": "whois.donuts.co",
    "chat": "whois.donuts.co",
    "forum": "whois.nic.forum",
}


# GOOGLE TLDs
GOOGLE_TLDS = {
    "page": "whois.nic.google",
    "new": "whois.nic.google",
    "how": "whois.nic.google",
    "soy": "whois.nic.google",
    "foo": "whois.nic.google",
}

# Suffix -> WHOIS server
WHOIS_SERVERS: dict[str, str] = {
    **GENERIC_TLDS,
    **TECH_TLDS,
    **POPULAR_NEW_TLDS,
    **EUROPE_TLDS,
    **NORDIC_TLDS,
    **UK_TLDS,
    **AMERICAS_TLDS,
    **ASIA_PACIFIC_TLDS,
    **MEA_TLDS,
    **CIS_TLDS,
    **SPECIAL_TLDS,
    **BUSINESS_TLDS,
    **LIFESTYLE_TLDS,
    **REALESTATE_TLDS,
    **EDUCATION_TLDS,
    **GOOGLE_TLDS,
}


def lookup_whois_server(
    domain: str, servers: Optional[dict[str, str]] = None
) -> Optional[str]:
    """
    Find the WHOIS server for a domain by its longest known suffix.

    ``shop.example.co.uk`` tries ``example.co.uk``, ``co.uk`` and ``uk`` in
    that order.

    Args:
        domain: ASCII domain name
        servers: Suffix to server mapping (defaults to WHOIS_SERVERS)

    Returns:
        WHOIS server hostname or None if the suffix is unknown
    """
    table = WHOIS_SERVERS if servers is None else servers
    labels = domain.lower().rstrip(".").split(".")
    for i in range(1, len(labels)):
        server = table.get(".".join(labels[i:]))
        if server:
            return server
    return None
