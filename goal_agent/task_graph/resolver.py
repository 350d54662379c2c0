"""
Argument resolution for task invocations.

Turns a task's declared args plus its dependencies' outputs into the payload
handed to the tool invoker.
"""

import json
import logging
import re
from typing import Any, Callable, Dict, Mapping, Optional

from ..errors import ResolutionError
from .values import Coordinates, ToolValue, match_coordinates, to_json_text

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")

# Shape matcher: returns the matched value, or None if the shape differs
ShapeMatcher = Callable[[Any], Optional[Any]]

SHAPE_MATCHERS: Dict[type, ShapeMatcher] = {
    Coordinates: match_coordinates,
}


def substitute_placeholders(text: str, dependency_outputs: Mapping[str, ToolValue]) -> str:
    """
    Replace every ``{{task_id}}`` token with the JSON form of that output.

    All tokens are replaced in one pass over the original text, so the order
    of distinct placeholders does not matter. Tokens naming an id that is not
    in ``dependency_outputs`` are left as they are.
    """
    def replace(match: "re.Match[str]") -> str:
        task_id = match.group(1)
        if task_id not in dependency_outputs:
            return match.group(0)
        return to_json_text(dependency_outputs[task_id])

    return PLACEHOLDER_PATTERN.sub(replace, text)


def _decode_json_object(value: Any) -> Any:
    """A string holding a JSON object (e.g. a substituted placeholder) becomes that object."""
    if not isinstance(value, str) or not value.strip().startswith("{"):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


class ArgumentResolver:
    """
    Builds concrete tool arguments for a task.

    Two strategies are applied:
    - Placeholder substitution on every string argument.
    - Type-directed injection for structured inputs (e.g. coordinates) the
      task did not give literally: the first dependency output, in
      ``depends_on`` order, whose shape matches is injected as-is.

    Example:
        resolver = ArgumentResolver({"getWeather": {"coordinates": Coordinates}})
        args = resolver.resolve(
            "getWeather",
            {"location": "{{task1}}"},
            {"task1": Coordinates(35.68, 139.69, "Tokyo")},
        )
    """

    def __init__(self, structured_inputs: Optional[Mapping[str, Mapping[str, type]]] = None):
        """
        Args:
            structured_inputs: tool name -> {argument name -> expected shape}
        """
        self._structured_inputs: Dict[str, Dict[str, type]] = {
            tool: dict(shapes) for tool, shapes in (structured_inputs or {}).items()
        }

    def resolve(
        self,
        tool: str,
        args: Mapping[str, Any],
        dependency_outputs: Mapping[str, ToolValue],
    ) -> Dict[str, Any]:
        """
        Resolve arguments for one invocation.

        Args:
            tool: Tool name of the task
            args: Declared arguments (not modified)
            dependency_outputs: Ordered mapping of dependency id -> output

        Returns:
            A new dict of resolved arguments

        Raises:
            ResolutionError: If a structured input has no literal value and no
                dependency output matches its shape
        """
        resolved: Dict[str, Any] = {}
        for name, value in args.items():
            if isinstance(value, str):
                resolved[name] = substitute_placeholders(value, dependency_outputs)
            else:
                resolved[name] = value

        for name, shape in self._structured_inputs.get(tool, {}).items():
            matcher = SHAPE_MATCHERS.get(shape)
            if matcher is None:
                continue

            literal = _decode_json_object(resolved.get(name))
            if literal is not None:
                matched = matcher(literal)
                if matched is not None:
                    resolved[name] = matched
                continue

            resolved[name] = self._inject(tool, name, matcher, dependency_outputs)

        return resolved

    def _inject(
        self,
        tool: str,
        argument: str,
        matcher: ShapeMatcher,
        dependency_outputs: Mapping[str, ToolValue],
    ) -> Any:
        for dep_id, output in dependency_outputs.items():
            matched = matcher(output)
            if matched is not None:
                logger.debug(f"Injected '{argument}' for {tool} from dependency {dep_id}")
                return matched
        raise ResolutionError(tool, argument)
