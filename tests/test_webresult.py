import json

from ddnsutil.webresult import Result, error_result, ok_result


def test_error_result_fields():
    result = error_result("boom")
    assert result.code == 500
    assert result.msg == "boom"
    assert result.data is None


def test_error_result_json():
    assert error_result("x").to_json() == '{"Code":500,"Msg":"x","Data":null}\n'


def test_ok_result_round_trip():
    result = ok_result("done", {"ip": "127.0.0.1", "n": [1, 2]})
    decoded = json.loads(result.to_json())
    assert decoded == {"Code": 200, "Msg": "done", "Data": {"ip": "127.0.0.1", "n": [1, 2]}}


def test_json_ends_with_newline_and_single_line():
    text = Result(200, "a\nb").to_json()
    assert text.endswith("\n")
    assert text.count("\n") == 1


def test_html_is_escaped():
    text = ok_result("<b>", None).to_json()
    assert "<" not in text
    assert json.loads(text)["Msg"] == "<b>"