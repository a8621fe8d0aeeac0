"""porkdns - declarative DNS records for Porkbun."""

__version__ = "0.1.0"
