import pytest
from cryptography import x509
from cryptography.x509.oid import ExtendedKeyUsageOID

from certstatus.errors import CertificateParseError
from certstatus.x509meta import decode_certificate_bytes, secret_fields
from _util import der_of, der_with_duplicate_ski, make_cert, pem_of


def test_decode_der_and_pem():
    cert = make_cert(serial=4242)
    assert decode_certificate_bytes(der_of(cert)).serial_number == 4242
    chain = pem_of(cert) + pem_of(make_cert(serial=7))
    # first block wins
    assert decode_certificate_bytes(chain).serial_number == 4242


def test_decode_garbage():
    with pytest.raises(CertificateParseError):
        decode_certificate_bytes(b"not a certificate")


def test_decode_rejects_duplicate_extension():
    with pytest.raises(CertificateParseError, match="2.5.29.14"):
        decode_certificate_bytes(der_with_duplicate_ski())


def test_secret_fields_ec_leaf():
    fields = secret_fields(make_cert(serial=255))
    assert fields["issuer_country"] == ("GB",)
    assert fields["issuer_organisation"] == ("Example Org",)
    assert fields["issuer_common_name"] == "Example CA"
    assert fields["key_usage"] == 1 | 4
    assert fields["ext_key_usage"] == (1, 2)
    assert fields["public_key_algorithm"] == "ECDSA"
    assert fields["signature_algorithm"] == "ECDSA-SHA256"
    assert fields["subject_key_id"] == bytes.fromhex("0a0b0c")
    assert fields["authority_key_id"] == bytes.fromhex("01ff")
    assert fields["serial_number"] == 255


def test_secret_fields_rsa_without_key_ids():
    fields = secret_fields(make_cert(key_type="rsa", with_key_ids=False, eku=[]))
    assert fields["public_key_algorithm"] == "RSA"
    assert fields["signature_algorithm"] == "SHA256-RSA"
    assert fields["subject_key_id"] == b""
    assert fields["authority_key_id"] == b""
    assert fields["ext_key_usage"] == ()


def test_secret_fields_key_agreement_bits_and_unknown_eku():
    ku = x509.KeyUsage(
        digital_signature=False, content_commitment=False, key_encipherment=False,
        data_encipherment=False, key_agreement=True, key_cert_sign=True,
        crl_sign=True, encipher_only=False, decipher_only=True,
    )
    eku = [ExtendedKeyUsageOID.OCSP_SIGNING, x509.ObjectIdentifier("1.2.3.4.5"), ExtendedKeyUsageOID.ANY_EXTENDED_KEY_USAGE]
    fields = secret_fields(make_cert(key_usage=ku, eku=eku))
    assert fields["key_usage"] == 16 | 32 | 64 | 256
    assert fields["ext_key_usage"] == (9, 0)
