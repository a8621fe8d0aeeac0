"""Conversion between fully-qualified record names and subdomain fragments."""


def normalize_name(remote_name: str, domain: str) -> str:
    """Return the subdomain fragment of ``remote_name`` under ``domain``.

    The API returns fully-qualified names while records are declared with the
    fragment only. The apex maps to an empty string. Names that do not end in
    ``.<domain>`` are returned unchanged, so a bare fragment is left alone.
    """
    if remote_name == domain:
        return ""
    suffix = f".{domain}"
    if domain and remote_name.endswith(suffix):
        return remote_name[: -len(suffix)]
    return remote_name
