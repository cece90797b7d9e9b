import re
from typing import Any, Dict, List, cast

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.x509.oid import NameOID, SignatureAlgorithmOID as SIGOID

from .errors import CertificateParseError

_PEM_CERT_RE = re.compile(
    rb"-----BEGIN CERTIFICATE-----\r?\n.*?\r?\n-----END CERTIFICATE-----",
    re.DOTALL,
)

# Extended key usage OIDs, indexed by the code used in usages.EXT_KEY_USAGE_LABELS
_EKU_CODES: Dict[str, int] = {
    "2.5.29.37.0": 0,
    "1.3.6.1.5.5.7.3.1": 1,
    "1.3.6.1.5.5.7.3.2": 2,
    "1.3.6.1.5.5.7.3.3": 3,
    "1.3.6.1.5.5.7.3.4": 4,
    "1.3.6.1.5.5.7.3.5": 5,
    "1.3.6.1.5.5.7.3.6": 6,
    "1.3.6.1.5.5.7.3.7": 7,
    "1.3.6.1.5.5.7.3.8": 8,
    "1.3.6.1.5.5.7.3.9": 9,
    "1.3.6.1.4.1.311.10.3.3": 10,
    "2.16.840.1.113730.4.1": 11,
    "1.3.6.1.4.1.311.2.1.22": 12,
    "1.3.6.1.4.1.311.61.1.1": 13,
}

_SIG_NAMES: Dict[x509.ObjectIdentifier, str] = {
    SIGOID.RSA_WITH_MD5: "MD5-RSA",
    SIGOID.RSA_WITH_SHA1: "SHA1-RSA",
    SIGOID.RSA_WITH_SHA224: "SHA224-RSA",
    SIGOID.RSA_WITH_SHA256: "SHA256-RSA",
    SIGOID.RSA_WITH_SHA384: "SHA384-RSA",
    SIGOID.RSA_WITH_SHA512: "SHA512-RSA",
    SIGOID.DSA_WITH_SHA1: "DSA-SHA1",
    SIGOID.DSA_WITH_SHA224: "DSA-SHA224",
    SIGOID.DSA_WITH_SHA256: "DSA-SHA256",
    SIGOID.ECDSA_WITH_SHA1: "ECDSA-SHA1",
    SIGOID.ECDSA_WITH_SHA224: "ECDSA-SHA224",
    SIGOID.ECDSA_WITH_SHA256: "ECDSA-SHA256",
    SIGOID.ECDSA_WITH_SHA384: "ECDSA-SHA384",
    SIGOID.ECDSA_WITH_SHA512: "ECDSA-SHA512",
    SIGOID.ED25519: "Ed25519",
    SIGOID.ED448: "Ed448",
}


def decode_certificate_bytes(data: bytes) -> x509.Certificate:
    """
    Load the first certificate found in ``data``: the first PEM CERTIFICATE
    block when there is one, otherwise the whole buffer as DER.
    """
    m = _PEM_CERT_RE.search(data)
    try:
        if m:
            cert = x509.load_pem_x509_certificate(m.group(0))
        else:
            cert = x509.load_der_x509_certificate(data)
        # extensions are parsed lazily; a duplicate or malformed one must fail here
        _ = cert.extensions
    except (ValueError, x509.DuplicateExtension, x509.UnsupportedGeneralNameType, UnsupportedAlgorithm) as e:
        raise CertificateParseError(str(e)) from e
    return cert


def _name_values(name: x509.Name, oid: x509.ObjectIdentifier) -> List[str]:
    return [str(attr.value) for attr in name.get_attributes_for_oid(oid)]


def _name_to_cn(name: x509.Name) -> str:
    values = _name_values(name, NameOID.COMMON_NAME)
    return values[0] if values else ""


def _key_usage(cert: x509.Certificate) -> int:
    try:
        ext = cert.extensions.get_extension_for_oid(x509.oid.ExtensionOID.KEY_USAGE)
        ku = cast(x509.KeyUsage, ext.value)
    except x509.ExtensionNotFound:
        return 0
    bits = 0
    if ku.digital_signature: bits |= 1
    if ku.content_commitment: bits |= 2
    if ku.key_encipherment: bits |= 4
    if ku.data_encipherment: bits |= 8
    if ku.key_agreement:
        bits |= 16
        # only readable when key_agreement is set
        if ku.encipher_only: bits |= 128
        if ku.decipher_only: bits |= 256
    if ku.key_cert_sign: bits |= 32
    if ku.crl_sign: bits |= 64
    return bits


def _ext_key_usage(cert: x509.Certificate) -> List[int]:
    try:
        ext = cert.extensions.get_extension_for_oid(x509.oid.ExtensionOID.EXTENDED_KEY_USAGE)
        eku = cast(x509.ExtendedKeyUsage, ext.value)
    except x509.ExtensionNotFound:
        return []
    # OIDs without a code are left out, as for any unrecognised usage
    return [_EKU_CODES[oid.dotted_string] for oid in eku if oid.dotted_string in _EKU_CODES]


def _public_key_algorithm(cert: x509.Certificate) -> str:
    from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed25519, ed448, rsa

    try:
        pk = cert.public_key()
    except UnsupportedAlgorithm:
        return "Unknown"
    if isinstance(pk, rsa.RSAPublicKey):
        return "RSA"
    if isinstance(pk, dsa.DSAPublicKey):
        return "DSA"
    if isinstance(pk, ec.EllipticCurvePublicKey):
        return "ECDSA"
    if isinstance(pk, ed25519.Ed25519PublicKey):
        return "Ed25519"
    if isinstance(pk, ed448.Ed448PublicKey):
        return "Ed448"
    return pk.__class__.__name__


def _signature_algorithm(cert: x509.Certificate) -> str:
    oid = cert.signature_algorithm_oid
    if oid == SIGOID.RSASSA_PSS:
        algo = cert.signature_hash_algorithm
        if isinstance(algo, hashes.HashAlgorithm):
            return f"{algo.name.upper()}-RSAPSS"
    return _SIG_NAMES.get(oid, oid.dotted_string)


def _ski(cert: x509.Certificate) -> bytes:
    try:
        ext = cert.extensions.get_extension_for_oid(x509.oid.ExtensionOID.SUBJECT_KEY_IDENTIFIER)
    except x509.ExtensionNotFound:
        return b""
    return cast(x509.SubjectKeyIdentifier, ext.value).digest


def _aki(cert: x509.Certificate) -> bytes:
    try:
        ext = cert.extensions.get_extension_for_oid(x509.oid.ExtensionOID.AUTHORITY_KEY_IDENTIFIER)
    except x509.ExtensionNotFound:
        return b""
    return cast(x509.AuthorityKeyIdentifier, ext.value).key_identifier or b""


def secret_fields(cert: x509.Certificate) -> Dict[str, Any]:
    """Fields of a parsed certificate shown in the Secret section of a status report."""
    return {
        "issuer_country": tuple(_name_values(cert.issuer, NameOID.COUNTRY_NAME)),
        "issuer_organisation": tuple(_name_values(cert.issuer, NameOID.ORGANIZATION_NAME)),
        "issuer_common_name": _name_to_cn(cert.issuer),
        "key_usage": _key_usage(cert),
        "ext_key_usage": tuple(_ext_key_usage(cert)),
        "public_key_algorithm": _public_key_algorithm(cert),
        "signature_algorithm": _signature_algorithm(cert),
        "subject_key_id": _ski(cert),
        "authority_key_id": _aki(cert),
        "serial_number": cert.serial_number,
    }

