from pathlib import Path

import pytest

from openapi_export.capture.native import parse_native
from openapi_export.errors import CaptureFormatError

FIXTURES = Path(__file__).parent / "fixtures"


class TestNativeLoader:
    def test_parse_yaml_capture(self):
        doc = parse_native(FIXTURES / "captured.yaml")
        assert doc.name == "Inventory API"
        assert [r.method for r in doc.requests] == ["GET", "POST", "GET"]
        assert doc.requests[1].body == {"sku": "A1", "qty": 3}
        assert doc.requests[2].auth.type == "apikey"

    def test_bare_list_is_request_list(self, tmp_path):
        f = tmp_path / "requests.json"
        f.write_text('[{"name": "Ping", "method": "GET", "url": "http://api.test/ping"}]')
        doc = parse_native(f)
        assert doc.name is None
        assert doc.requests[0].name == "Ping"

    def test_missing_required_field_raises(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("requests:\n  - name: NoUrl\n    method: GET\n")
        with pytest.raises(CaptureFormatError) as exc:
            parse_native(f)
        assert exc.value.path == f

    def test_scalar_document_raises(self, tmp_path):
        f = tmp_path / "scalar.yaml"
        f.write_text("just text")
        with pytest.raises(CaptureFormatError):
            parse_native(f)

    def test_query_string_moves_out_of_url(self, tmp_path):
        f = tmp_path / "query.yaml"
        f.write_text(
            "requests:\n"
            "  - name: Search\n"
            "    method: GET\n"
            "    url: http://api.test/items?page=2&q=#top\n"
            "    query:\n"
            "      - key: page\n"
            "        value: '1'\n",
            encoding="utf-8",
        )
        req = parse_native(f).requests[0]
        assert req.url == "http://api.test/items"
        assert [(q.key, q.value) for q in req.query] == [("page", "1"), ("q", "")]
