class CertStatusError(Exception):
    """Base class for errors raised while collecting certificate status."""


class MissingCertificateDataError(CertStatusError):
    def __init__(self, key: str, secret_name: str) -> None:
        super().__init__(f"error: '{key}' of Secret \"{secret_name}\" is not set\n")
        self.key = key
        self.secret_name = secret_name


class CertificateParseError(CertStatusError):
    pass


class UnknownExtKeyUsageError(CertStatusError, ValueError):
    def __init__(self, code: int) -> None:
        super().__init__(
            "error when converting Extended Usages to string: "
            f"encountered unknown Extended Usage with code {code}"
        )
        self.code = code
