from typing import Dict, Iterable, List

from .errors import UnknownExtKeyUsageError

KEY_USAGE_LABELS: Dict[int, str] = {
    1: "Digital Signature",
    2: "Content Commitment",
    4: "Key Encipherment",
    8: "Data Encipherment",
    16: "Key Agreement",
    32: "Cert Sign",
    64: "CRL Sign",
    128: "Encipher Only",
    256: "Decipher Only",
}

# walked from the highest bit down
_KEY_USAGE_VALUES = sorted(KEY_USAGE_LABELS, reverse=True)
_KEY_USAGE_MASK = sum(KEY_USAGE_LABELS)

EXT_KEY_USAGE_LABELS = (
    "Any",
    "Server Authentication",
    "Client Authentication",
    "Code Signing",
    "Email Protection",
    "IPSEC End System",
    "IPSEC Tunnel",
    "IPSEC User",
    "Time Stamping",
    "OCSP Signing",
    "Microsoft Server Gated Crypto",
    "Netscape Server Gated Crypto",
    "Microsoft Commercial Code Signing",
    "Microsoft Kernel Code Signing",
)


def key_usage_to_labels(usage: int) -> List[str]:
    remaining = usage & _KEY_USAGE_MASK
    labels: List[str] = []
    for val in _KEY_USAGE_VALUES:
        if remaining >= val:
            remaining -= val
            labels.append(KEY_USAGE_LABELS[val])
        if remaining == 0:
            break
    # lowest bit first, the order usages are usually printed in
    labels.reverse()
    return labels


def ext_key_usage_to_labels(codes: Iterable[int]) -> str:
    """
    Map extended key usage codes to their labels, joined with ", ".
    Raises UnknownExtKeyUsageError on the first code outside the table.
    """
    labels: List[str] = []
    for code in codes:
        if code < 0 or code >= len(EXT_KEY_USAGE_LABELS):
            raise UnknownExtKeyUsageError(code)
        labels.append(EXT_KEY_USAGE_LABELS[code])
    return ", ".join(labels)
