"""
Argument Resolver Unit Tests

placeholder 치환과 타입 기반 주입의 단위 테스트입니다.
"""

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from goal_agent.errors import ResolutionError, ToolError
from goal_agent.task_graph import ArgumentResolver, Coordinates, substitute_placeholders
from goal_agent.task_graph.values import match_coordinates, to_display_text


TOKYO = Coordinates(35.6895, 139.6917, "Tokyo, Japan")
PARIS = Coordinates(48.8566, 2.3522, "Paris, France")

WEATHER_INPUTS = {"getWeather": {"coordinates": Coordinates}}


class TestSubstitutePlaceholders:
    """substitute_placeholders 테스트"""

    def test_string_output_is_json_quoted(self):
        """문자열 결과는 JSON 문자열로 치환"""
        text = substitute_placeholders("summarize {{task1}}", {"task1": "hello"})
        assert text == 'summarize "hello"'

    def test_number_output(self):
        """숫자 결과"""
        assert substitute_placeholders("{{a}} * 2", {"a": 21}) == "21 * 2"

    def test_structured_output(self):
        """구조화된 결과는 JSON 객체로 치환"""
        text = substitute_placeholders("at {{loc}}", {"loc": Coordinates(1.0, 2.0)})
        assert text == 'at {"latitude": 1.0, "longitude": 2.0}'

    def test_every_occurrence_replaced(self):
        """같은 placeholder가 여러 번 나와도 모두 치환"""
        text = substitute_placeholders("{{a}} + {{a}} + {{b}}", {"a": 1, "b": 2})
        assert text == "1 + 1 + 2"

    def test_unknown_placeholder_left_untouched(self):
        """의존성이 아닌 id는 그대로 유지"""
        text = substitute_placeholders("{{a}} and {{ghost}}", {"a": "x"})
        assert text == '"x" and {{ghost}}'

    def test_substituted_text_is_not_rescanned(self):
        """치환된 값 안의 placeholder는 다시 치환하지 않음"""
        outputs = {"a": "{{b}}", "b": "secret"}
        assert substitute_placeholders("{{a}}", outputs) == '"{{b}}"'

    def test_order_of_dependencies_irrelevant(self):
        """서로 다른 placeholder의 치환 순서 무관"""
        forward = substitute_placeholders("{{a}}-{{b}}", {"a": 1, "b": 2})
        backward = substitute_placeholders("{{a}}-{{b}}", {"b": 2, "a": 1})
        assert forward == backward == "1-2"

    def test_text_without_placeholders(self):
        """placeholder 없는 텍스트"""
        assert substitute_placeholders("plain {text}", {"a": 1}) == "plain {text}"


class TestArgumentResolver:
    """ArgumentResolver 테스트"""

    def test_string_args_substituted(self):
        """문자열 인자 치환"""
        resolver = ArgumentResolver()
        args = resolver.resolve("calculate", {"expression": "{{task1}} * 2"}, {"task1": 21})
        assert args == {"expression": "21 * 2"}

    def test_non_string_args_kept(self):
        """문자열이 아닌 인자는 그대로"""
        resolver = ArgumentResolver()
        args = resolver.resolve("custom", {"count": 3, "flags": ["{{a}}"]}, {"a": "x"})
        assert args == {"count": 3, "flags": ["{{a}}"]}

    def test_declared_args_not_mutated(self):
        """선언된 args는 변경되지 않음"""
        resolver = ArgumentResolver(WEATHER_INPUTS)
        declared = {"location": "{{task1}}"}

        resolved = resolver.resolve("getWeather", declared, {"task1": TOKYO})

        assert declared == {"location": "{{task1}}"}
        assert resolved is not declared

    def test_structured_input_injected(self):
        """구조화된 입력은 의존성 결과에서 그대로 주입"""
        resolver = ArgumentResolver(WEATHER_INPUTS)

        args = resolver.resolve("getWeather", {"location": "Tokyo"}, {"task1": TOKYO})

        assert args["coordinates"] is TOKYO
        assert args["location"] == "Tokyo"

    def test_first_matching_dependency_wins(self):
        """depends_on 순서상 처음 일치하는 결과 주입"""
        resolver = ArgumentResolver(WEATHER_INPUTS)
        outputs = {"task1": "Search Summary: ...", "task2": PARIS, "task3": TOKYO}

        args = resolver.resolve("getWeather", {}, outputs)

        assert args["coordinates"] is PARIS

    def test_mapping_with_coordinate_shape_injected(self):
        """좌표 형태의 JSON 레코드도 주입 가능"""
        resolver = ArgumentResolver(WEATHER_INPUTS)

        args = resolver.resolve("getWeather", {}, {"task1": {"lat": 10, "lon": 20}})

        assert args["coordinates"] == Coordinates(10.0, 20.0)

    def test_missing_structured_input_raises(self):
        """일치하는 결과가 없으면 ResolutionError"""
        resolver = ArgumentResolver(WEATHER_INPUTS)

        with pytest.raises(ResolutionError) as exc_info:
            resolver.resolve("getWeather", {"location": "Tokyo"}, {"task1": "no coordinates"})

        error = exc_info.value
        assert isinstance(error, ToolError)
        assert error.argument == "coordinates"
        assert error.tool_name == "getWeather"
        assert "coordinates" in error.message

    def test_missing_structured_input_without_dependencies(self):
        """의존성이 없어도 ResolutionError"""
        resolver = ArgumentResolver(WEATHER_INPUTS)
        with pytest.raises(ResolutionError):
            resolver.resolve("getWeather", {}, {})

    def test_literal_structured_value_is_normalized(self):
        """리터럴로 주어진 좌표는 Coordinates로 변환"""
        resolver = ArgumentResolver(WEATHER_INPUTS)

        args = resolver.resolve(
            "getWeather",
            {"coordinates": {"latitude": 1, "longitude": 2}},
            {"task1": TOKYO},
        )

        assert args["coordinates"] == Coordinates(1.0, 2.0)

    def test_literal_value_of_other_shape_kept(self):
        """형태가 다른 리터럴은 주입하지 않고 그대로 둠"""
        resolver = ArgumentResolver(WEATHER_INPUTS)

        args = resolver.resolve("getWeather", {"coordinates": "Tokyo"}, {"task1": TOKYO})

        assert args["coordinates"] == "Tokyo"

    def test_placeholder_for_structured_input(self):
        """구조화된 인자에 쓴 placeholder는 JSON 텍스트를 거쳐 Coordinates로 복원"""
        resolver = ArgumentResolver(WEATHER_INPUTS)

        args = resolver.resolve("getWeather", {"coordinates": "{{task1}}"}, {"task1": TOKYO})

        assert args["coordinates"] == Coordinates(35.6895, 139.6917, "Tokyo, Japan")

    def test_json_text_literal_for_structured_input(self):
        """JSON 객체 문자열 리터럴도 좌표로 변환"""
        resolver = ArgumentResolver(WEATHER_INPUTS)

        args = resolver.resolve(
            "getWeather", {"coordinates": '{"lat": 10, "lon": 20}'}, {"task1": TOKYO}
        )

        assert args["coordinates"] == Coordinates(10.0, 20.0)

    def test_broken_json_text_kept(self):
        """JSON이 아닌 중괄호 문자열은 그대로 둠"""
        resolver = ArgumentResolver(WEATHER_INPUTS)

        args = resolver.resolve("getWeather", {"coordinates": "{{ghost}}"}, {"task1": TOKYO})

        assert args["coordinates"] == "{{ghost}}"

    def test_tools_without_structured_inputs_untouched(self):
        """구조화된 입력이 없는 Tool은 주입 없음"""
        resolver = ArgumentResolver(WEATHER_INPUTS)
        args = resolver.resolve("summarize", {"query": "x"}, {"task1": TOKYO})
        assert args == {"query": "x"}


class TestValues:
    """값 타입 테스트"""

    def test_match_coordinates(self):
        """좌표 형태 판별"""
        assert match_coordinates(TOKYO) is TOKYO
        assert match_coordinates({"latitude": 1, "longitude": 2, "name": "X"}) == Coordinates(1.0, 2.0, "X")
        assert match_coordinates({"latitude": "1", "longitude": 2}) is None
        assert match_coordinates({"latitude": True, "longitude": 2}) is None
        assert match_coordinates("35.6, 139.6") is None
        assert match_coordinates(None) is None

    def test_display_text(self):
        """표시용 텍스트"""
        assert to_display_text("plain") == "plain"
        assert to_display_text(42) == "42"
        assert to_display_text({"a": 1}) == '{"a": 1}'
        assert to_display_text(TOKYO) == (
            '{"latitude": 35.6895, "longitude": 139.6917, "label": "Tokyo, Japan"}'
        )

    def test_coordinates_str(self):
        """좌표 문자열 표현"""
        assert str(Coordinates(1.0, 2.0)) == "(1.0000, 2.0000)"
        assert str(Coordinates(1.0, 2.0, "Here")) == "Here (1.0000, 2.0000)"
