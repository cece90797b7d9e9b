import datetime as dt

from certstatus.resources import Certificate, CertificateRequest, Event, Issuer, ObjectMeta
from certstatus.status import Failed, IssuerStatus
from certstatus.summary import describe_certificate, render_report
from _util import NOW, der_of, make_cert, make_secret, ready


def _certificate(kind: str = "Issuer") -> Certificate:
    return Certificate(
        metadata=ObjectMeta(name="web", namespace="default", creation_timestamp=NOW),
        dns_names=["example.com"],
        issuer_name="ca",
        issuer_kind=kind,
        conditions=[ready()],
        not_after=NOW + dt.timedelta(days=90),
    )


def _no_events(events, level):
    return "  " * level + "Events:  <none>\n"


def test_describe_certificate_absent():
    assert describe_certificate(None) is None


def test_describe_certificate_uses_issuer_kind():
    issuer = Issuer(metadata=ObjectMeta(name="ca"))
    report = describe_certificate(_certificate("ClusterIssuer"), issuer=issuer)
    assert report.issuer_kind == "ClusterIssuer"
    assert report.issuer == IssuerStatus(name="ca", kind="ClusterIssuer")
    report = describe_certificate(_certificate(), issuer=issuer)
    assert report.issuer == IssuerStatus(name="ca", kind="Issuer")


def test_describe_certificate_request_events_replace_certificate_events():
    req = CertificateRequest(metadata=ObjectMeta(name="web-1", namespace="default"))
    report = describe_certificate(
        _certificate(),
        events=[Event(reason="Issuing")],
        request=req,
        request_events=[Event(reason="Issued")],
    )
    assert [e.reason for e in report.events] == ["Issued"]


def test_render_full_report():
    err = RuntimeError("error when finding Secret \"web-tls\": not found\n")
    report = describe_certificate(
        _certificate(),
        issuer=Issuer(metadata=ObjectMeta(name="ca"), conditions=[ready("KeyPairVerified", "ok")]),
        secret_err=err,
        request=CertificateRequest(metadata=ObjectMeta(name="web-1", namespace="default")),
    )
    assert isinstance(report.secret, Failed)
    out = render_report(report, _no_events)
    assert out.startswith(
        "Name: web\n"
        "Namespace: default\n"
        "Created at: 2024-05-01T12:00:00Z\n"
        "Conditions:\n"
        "  Ready: True, Reason: Issued, Message: Certificate issued\n"
        "DNS Names:\n"
        "- example.com\n"
        "Events:  <none>\n"
        "Issuer:\n"
        "  Name: ca\n"
        "  Kind: Issuer\n"
        "  Conditions:\n"
        "    Ready: True, Reason: KeyPairVerified, Message: ok\n"
        "error when finding Secret \"web-tls\": not found\n"
        "Not Before: <none>\n"
        "Not After: 2024-07-30T12:00:00Z\n"
        "Renewal Time: <none>\n"
        "CertificateRequest:\n"
    )
    assert out.endswith("  Events:  <none>\n")


def test_render_report_with_secret_and_without_request():
    report = describe_certificate(_certificate(), secret=make_secret(cert_data=der_of(make_cert(serial=255))))
    out = render_report(report, _no_events)
    assert "Secret:\n  Name: web-tls\n" in out
    assert "  Serial Number: ff\n" in out
    assert out.endswith("No CertificateRequest found for this Certificate\n")
