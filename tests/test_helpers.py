"""Tests for the pure shaping helpers and tool response wrappers."""

import json

import pytest

from altegio_mcp.common import (
    ToolValidationError,
    build_params_from_locals,
    detect_search_type,
    filter_active_staff,
    filter_by_api_id,
    format_error_response,
    format_text_response,
    format_tool_response,
    handle_tool_errors,
)
from altegio_mcp.tools.records import ClientInfo, ServiceRef


class TestDetectSearchType:
    @pytest.mark.parametrize("query", ["+66812345678", "89991234567", "+7 (999) 123-45-67", "123456"])
    def test_phone(self, query):
        assert detect_search_type(query) == ("phone", query)

    def test_five_digits_is_a_name(self):
        assert detect_search_type("12345") == ("fullname", "12345")

    def test_phone_must_start_with_a_digit(self):
        assert detect_search_type("(999) 123-45-67").field == "fullname"

    @pytest.mark.parametrize("query", ["١٢٣٤٥٦٧", "１２３４５６７"])
    def test_non_ascii_digits_are_a_name(self, query):
        assert detect_search_type(query) == ("fullname", query)

    @pytest.mark.parametrize("query", ["anna@example.com", "12345678@mail.ru", "a@"])
    def test_email(self, query):
        assert detect_search_type(query).field == "email"

    def test_name(self):
        assert detect_search_type("Иван Петров") == ("fullname", "Иван Петров")

    def test_input_is_trimmed(self):
        assert detect_search_type("  +66812345678  ") == ("phone", "+66812345678")
        assert detect_search_type("  Anna ") == ("fullname", "Anna")

    def test_empty_input_is_a_name(self):
        assert detect_search_type("   ") == ("fullname", "")

    def test_classification_is_stable(self):
        assert detect_search_type("anna@example.com") == detect_search_type("anna@example.com")


class TestFilterActiveStaff:
    def test_excludes_fired(self):
        staff = [
            {"id": 1, "fired": 1},
            {"id": 2, "fired": True},
            {"id": 3, "fired": 0},
            {"id": 4, "fired": False},
            {"id": 5},
        ]
        assert [member["id"] for member in filter_active_staff(staff)] == [3, 4, 5]

    def test_string_flag_is_not_treated_as_fired(self):
        assert filter_active_staff([{"id": 1, "fired": "1"}]) == [{"id": 1, "fired": "1"}]

    def test_empty_list(self):
        assert filter_active_staff([]) == []


class TestFilterByApiId:
    def test_matches_numeric_string(self):
        records = [{"id": 1, "api_id": "42"}, {"id": 2, "api_id": 7}]
        assert filter_by_api_id(records, 42) == [{"id": 1, "api_id": "42"}]

    def test_matches_number(self):
        records = [{"id": 1, "api_id": 42}, {"id": 2, "api_id": 0}, {"id": 3}]
        assert filter_by_api_id(records, 42) == [{"id": 1, "api_id": 42}]

    def test_no_matches(self):
        assert filter_by_api_id([{"id": 1, "api_id": 0}], 999) == []


class TestResponses:
    def test_tool_response_is_pretty_json(self):
        data = [{"id": 1, "name": "Анна"}]
        result = format_tool_response(data)

        assert len(result.content) == 1
        assert result.content[0].type == "text"
        assert result.content[0].text == json.dumps(data, indent=2, ensure_ascii=False)
        assert result.is_error is False

    def test_tool_response_with_null(self):
        assert format_tool_response(None).content[0].text == "null"

    def test_text_response(self):
        result = format_text_response("nothing here")
        assert result.content[0].text == "nothing here"
        assert result.is_error is False

    def test_error_response_from_exception(self):
        result = format_error_response(RuntimeError("boom"))
        assert result.content[0].text == "boom"
        assert result.is_error is True

    def test_error_response_from_plain_value(self):
        assert format_error_response("bad input").content[0].text == "bad input"
        assert format_error_response(404).content[0].text == "404"


class TestHandleToolErrors:
    @pytest.mark.asyncio
    async def test_passes_result_through(self):
        @handle_tool_errors
        async def tool():
            return format_text_response("ok")

        result = await tool()
        assert result.content[0].text == "ok"
        assert not result.is_error

    @pytest.mark.asyncio
    async def test_converts_exceptions(self):
        @handle_tool_errors
        async def tool():
            raise ToolValidationError("Specify at least one field to update")

        result = await tool()
        assert result.is_error
        assert "at least one field" in result.content[0].text


class TestBuildParamsFromLocals:
    def test_drops_none_and_excluded_keys(self):
        params = build_params_from_locals({"record_id": 1, "comment": None, "attendance": 0}, exclude=["record_id"])
        assert params == {"attendance": 0}

    def test_dumps_models(self):
        params = build_params_from_locals({
            "services": [ServiceRef(id=10)],
            "client": ClientInfo(name="Anna", phone="+66812345678"),
        })
        assert params == {
            "services": [{"id": 10}],
            "client": {"name": "Anna", "phone": "+66812345678"},
        }
