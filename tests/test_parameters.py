from openapi_export.capture.base import CapturedRequest, KeyValue
from openapi_export.converter.parameters import RequestParameterBinder


def _request(**kwargs) -> CapturedRequest:
    return CapturedRequest(name="req", method="GET", url="http://api.test/", **kwargs)


class TestRequestParameterBinder:
    def test_path_variables_first_in_declaration_order(self):
        req = _request(
            query=[KeyValue(key="page", value="1")],
            path_variables=[KeyValue(key="b", value="2"), KeyValue(key="a", value="1")],
        )
        params = RequestParameterBinder().bind(req).parameters
        assert [(p.name, p.location) for p in params] == [
            ("b", "path"),
            ("a", "path"),
            ("page", "query"),
        ]
        assert params[0].required is True
        assert params[0].default == "2"

    def test_path_variable_without_value_keeps_null_default(self):
        req = _request(path_variables=[KeyValue(key="id")])
        param = RequestParameterBinder().bind(req).parameters[0]
        assert param.has_default is True
        assert param.default is None

    def test_disabled_entries_are_skipped(self):
        req = _request(query=[KeyValue(key="debug", value="1", disabled=True)])
        assert RequestParameterBinder().bind(req).parameters == []

    def test_auth_and_content_type_headers_are_not_parameters(self):
        req = _request(headers=[
            KeyValue(key="Authorization", value="Bearer x"),
            KeyValue(key="Content-Type", value="application/json"),
            KeyValue(key="X-Trace", value="t1"),
        ])
        params = RequestParameterBinder().bind(req).parameters
        assert [(p.name, p.location) for p in params] == [("X-Trace", "header")]

    def test_cookie_header_is_split(self):
        req = _request(headers=[KeyValue(key="Cookie", value="session=abc; theme=dark")])
        params = RequestParameterBinder().bind(req).parameters
        assert [(p.name, p.location, p.default) for p in params] == [
            ("session", "cookie", "abc"),
            ("theme", "cookie", "dark"),
        ]

    def test_to_openapi_uses_aliases(self):
        req = _request(path_variables=[KeyValue(key="id", value="7")])
        data = RequestParameterBinder().bind(req).parameters[0].to_openapi()
        assert data == {
            "name": "id",
            "in": "path",
            "required": True,
            "schema": {"type": "string", "default": "7"},
        }


class TestBodyContentType:
    def test_explicit_content_type_wins(self):
        req = _request(body="x", body_content_type="text/csv",
                       headers=[KeyValue(key="Content-Type", value="application/xml")])
        assert RequestParameterBinder().bind(req).body_content_type == "text/csv"

    def test_content_type_header(self):
        req = _request(body="<a/>", headers=[KeyValue(key="Content-Type", value="application/xml; charset=utf-8")])
        assert RequestParameterBinder().bind(req).body_content_type == "application/xml"

    def test_structured_body_defaults_to_json(self):
        assert RequestParameterBinder().bind(_request(body={"a": 1})).body_content_type == "application/json"

    def test_text_body_defaults_to_plain(self):
        assert RequestParameterBinder().bind(_request(body="hello")).body_content_type == "text/plain"
