from certstatus.render import format_conditions, render_cr, render_issuer, render_secret, serial_hex
from certstatus.resources import Condition, Event
from certstatus.status import CRStatus, Failed, IssuerStatus, SecretStatus, StatusBuilder
from _util import der_of, make_cert, make_secret, ready


def test_failed_sections_render_error_only():
    err = RuntimeError("error: something went wrong")
    assert render_issuer(Failed(err)) == "error: something went wrong"
    assert render_secret(Failed(err)) == "error: something went wrong"
    assert render_cr(Failed(err)) == "error: something went wrong"


def test_issuer_without_conditions():
    out = render_issuer(IssuerStatus(name="ca", kind="ClusterIssuer"))
    assert out == (
        "Issuer:\n"
        "  Name: ca\n"
        "  Kind: ClusterIssuer\n"
        "  Conditions:\n"
        "    No Conditions set\n"
    )


def test_issuer_conditions_in_order():
    conds = (ready(), Condition(type="Issuing", status="False", reason="Done", message="ok"), ready())
    out = render_issuer(IssuerStatus(name="ca", kind="Issuer", conditions=conds))
    lines = out.splitlines()
    assert lines[4:] == [
        "    Ready: True, Reason: Issued, Message: Certificate issued",
        "    Issuing: False, Reason: Done, Message: ok",
        "    Ready: True, Reason: Issued, Message: Certificate issued",
    ]


def test_format_conditions_indent():
    assert format_conditions([], indent="  ") == "  No Conditions set\n"
    assert "Ready: True, Reason: Issued, Message: Certificate issued" in format_conditions([ready()])


def test_secret_rendering_from_certificate():
    report = StatusBuilder().with_secret(make_secret(cert_data=der_of(make_cert(serial=255)))).build()
    out = render_secret(report.secret)
    assert out.startswith("Secret:\n  Name: web-tls\n")
    assert "  Issuer Country: GB\n" in out
    assert "  Issuer Organisation: Example Org\n" in out
    assert "  Issuer Common Name: Example CA\n" in out
    assert "  Key Usage: Digital Signature, Key Encipherment\n" in out
    assert "  Extended Key Usages: Server Authentication, Client Authentication\n" in out
    assert "  Public Key Algorithm: ECDSA\n" in out
    assert "  Signature Algorithm: ECDSA-SHA256\n" in out
    assert "  Subject Key ID: 0a0b0c\n" in out
    assert "  Authority Key ID: 01ff\n" in out
    assert out.endswith("  Serial Number: ff\n")


def test_secret_rendering_substitutes_unknown_ext_usage_error():
    out = render_secret(SecretStatus(name="s", ext_key_usage=(1, 99), serial_number=1))
    assert "  Extended Key Usages: error when converting Extended Usages to string: " \
           "encountered unknown Extended Usage with code 99\n" in out
    assert "  Serial Number: 01\n" in out


def test_serial_hex():
    assert serial_hex(255) == "ff"
    assert serial_hex(256) == "0100"
    assert serial_hex(0) == ""


def test_cr_render_appends_described_events():
    seen = []

    def describe(events, level):
        seen.append((events, level))
        return "  Events:  <described>\n"

    events = (Event(reason="Issued"),)
    out = render_cr(CRStatus(name="web-1", namespace="default", events=events), describe)
    assert out == (
        "CertificateRequest:\n"
        "  Name: web-1\n"
        "  Namespace: default\n"
        "  Conditions:\n"
        "    No Conditions set\n"
        "  Events:  <described>\n"
    )
    assert seen == [(events, 1)]


def test_cr_render_default_describer_without_events():
    out = render_cr(CRStatus(name="web-1", namespace="default", conditions=(ready(),)))
    assert "    Ready: True, Reason: Issued, Message: Certificate issued\n" in out
    assert out.endswith("  Events:  <none>\n")
