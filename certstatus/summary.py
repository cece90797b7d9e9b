from typing import Optional, Sequence

from .common import format_time
from .events import EventDescriber, describe_events
from .render import format_conditions, render_cr, render_issuer, render_secret
from .resources import Certificate, CertificateRequest, Event, Issuer, Secret
from .status import DEFAULT_CERT_DATA_KEY, Report, StatusBuilder


def describe_certificate(
    certificate: Optional[Certificate],
    *,
    issuer: Optional[Issuer] = None,
    issuer_err: Optional[BaseException] = None,
    secret: Optional[Secret] = None,
    secret_err: Optional[BaseException] = None,
    request: Optional[CertificateRequest] = None,
    request_events: Optional[Sequence[Event]] = None,
    request_err: Optional[BaseException] = None,
    events: Optional[Sequence[Event]] = None,
    cert_data_key: str = DEFAULT_CERT_DATA_KEY,
) -> Optional[Report]:
    """
    Build the status report of ``certificate`` from the results of the
    Issuer/ClusterIssuer, Secret and CertificateRequest lookups.
    The issuer kind comes from the Certificate's issuer reference.
    """
    if certificate is None:
        return None
    builder = StatusBuilder.from_certificate(certificate, cert_data_key)

    kind = certificate.issuer_kind
    builder.with_events(events).with_issuer_kind(kind)
    if kind == "ClusterIssuer":
        builder.with_cluster_issuer(issuer, issuer_err)
    else:
        builder.with_issuer(issuer, issuer_err)
    return builder.with_secret(secret, secret_err).with_cr(request, request_events, request_err).build()


def _section(text: Optional[str]) -> str:
    if not text:
        return ""
    return text if text.endswith("\n") else text + "\n"


def render_report(report: Report, describe: EventDescriber = describe_events) -> str:
    out = ""
    out += f"Name: {report.name}\n"
    out += f"Namespace: {report.namespace}\n"
    out += f"Created at: {format_time(report.creation_time)}\n"
    out += "Conditions:\n" + format_conditions(report.conditions, indent="  ")
    out += "DNS Names:\n" + "".join(f"- {n}\n" for n in report.dns_names)
    out += describe(report.events, 0)
    if report.issuer is not None:
        out += _section(render_issuer(report.issuer))
    if report.secret is not None:
        out += _section(render_secret(report.secret))
    out += f"Not Before: {format_time(report.not_before)}\n"
    out += f"Not After: {format_time(report.not_after)}\n"
    out += f"Renewal Time: {format_time(report.renewal_time)}\n"
    if report.cr is not None:
        out += _section(render_cr(report.cr, describe))
    else:
        out += "No CertificateRequest found for this Certificate\n"
    return out
