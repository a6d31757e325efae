# tests/test_openapi_cli.py
import json

from salesnav.openapi_cli import main


def test_writes_openapi_document(tmp_path):
    out = tmp_path / "docs" / "openapi.json"
    assert main(["--out", str(out), "--server", "http://localhost:8000"]) == 0

    doc = json.loads(out.read_text(encoding="utf-8"))
    assert doc["servers"] == [{"url": "http://localhost:8000"}]
    for path in ("/extract-session", "/generate-url-with-session", "/parse-url", "/validate-filters"):
        assert path in doc["paths"]
