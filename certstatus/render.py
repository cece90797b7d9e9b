"""Text rendering of the Issuer, Secret and CertificateRequest sections of a report."""
from typing import Sequence

from .errors import UnknownExtKeyUsageError
from .events import EventDescriber, describe_events
from .resources import Condition
from .status import CRReport, Failed, IssuerReport, SecretReport
from .usages import ext_key_usage_to_labels, key_usage_to_labels

NO_CONDITIONS = "No Conditions set"


def format_conditions(conditions: Sequence[Condition], indent: str = "    ") -> str:
    if not conditions:
        return f"{indent}{NO_CONDITIONS}\n"
    return "".join(
        f"{indent}{c.type}: {c.status}, Reason: {c.reason}, Message: {c.message}\n" for c in conditions
    )


def serial_hex(serial: int) -> str:
    # hex of the big-endian magnitude, empty for zero
    magnitude = abs(serial)
    return magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big").hex()


def render_issuer(report: IssuerReport) -> str:
    if isinstance(report, Failed):
        return str(report)
    return (
        "Issuer:\n"
        f"  Name: {report.name}\n"
        f"  Kind: {report.kind}\n"
        "  Conditions:\n"
        f"{format_conditions(report.conditions)}"
    )


def render_secret(report: SecretReport) -> str:
    if isinstance(report, Failed):
        return str(report)
    try:
        ext_key_usages = ext_key_usage_to_labels(report.ext_key_usage)
    except UnknownExtKeyUsageError as e:
        ext_key_usages = str(e)
    return (
        "Secret:\n"
        f"  Name: {report.name}\n"
        f"  Issuer Country: {', '.join(report.issuer_country)}\n"
        f"  Issuer Organisation: {', '.join(report.issuer_organisation)}\n"
        f"  Issuer Common Name: {report.issuer_common_name}\n"
        f"  Key Usage: {', '.join(key_usage_to_labels(report.key_usage))}\n"
        f"  Extended Key Usages: {ext_key_usages}\n"
        f"  Public Key Algorithm: {report.public_key_algorithm}\n"
        f"  Signature Algorithm: {report.signature_algorithm}\n"
        f"  Subject Key ID: {report.subject_key_id.hex()}\n"
        f"  Authority Key ID: {report.authority_key_id.hex()}\n"
        f"  Serial Number: {serial_hex(report.serial_number)}\n"
    )


def render_cr(report: CRReport, describe: EventDescriber = describe_events) -> str:
    if isinstance(report, Failed):
        return str(report)
    return (
        "CertificateRequest:\n"
        f"  Name: {report.name}\n"
        f"  Namespace: {report.namespace}\n"
        "  Conditions:\n"
        f"{format_conditions(report.conditions)}"
        f"{describe(report.events, 1)}"
    )
