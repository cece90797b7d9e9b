from certstatus.settings import Settings

def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("CERTSTATUS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("CERTSTATUS_CERT_DATA_KEY", raising=False)

    s = Settings.from_env()
    assert s.LOG_LEVEL == "INFO"
    assert s.CERT_DATA_KEY == "tls.crt"

def test_settings_parsing(monkeypatch):
    monkeypatch.setenv("CERTSTATUS_LOG_LEVEL", "debug")
    monkeypatch.setenv("CERTSTATUS_CERT_DATA_KEY", "ca.crt")

    s = Settings.from_env()
    assert s.LOG_LEVEL == "DEBUG"
    assert s.CERT_DATA_KEY == "ca.crt"

def test_settings_blank_key_falls_back(monkeypatch):
    monkeypatch.setenv("CERTSTATUS_CERT_DATA_KEY", "  ")
    assert Settings.from_env().CERT_DATA_KEY == "tls.crt"
