import re
from dataclasses import dataclass
from typing import Iterable, List

from google.api import http_pb2

from rpcdocs.schema import Message, Placement

# {name}, {name.sub} and {name=pattern/*}
_PLACEHOLDER = re.compile(r"\{([^}=]+)(?:=[^}]*)?\}")
_QUERY_VERBS = frozenset({"GET", "DELETE"})


@dataclass(frozen=True)
class RestMapping:
    """How a method is exposed over HTTP."""

    method: str
    path: str
    body: str = ""
    response_body: str = ""

    @classmethod
    def from_http_rule(cls, rule: http_pb2.HttpRule) -> "RestMapping":
        pattern = rule.WhichOneof("pattern")
        if pattern is None:
            verb, path = "", ""
        elif pattern == "custom":
            verb, path = rule.custom.kind.upper(), rule.custom.path
        else:
            verb, path = pattern.upper(), getattr(rule, pattern)
        return cls(method=verb, path=path, body=rule.body, response_body=rule.response_body)

    @classmethod
    def from_http_rules(cls, rules: Iterable[http_pb2.HttpRule]) -> List["RestMapping"]:
        """Flatten rules and their additional bindings, in declaration order."""
        mappings = []
        for rule in rules:
            mappings.append(cls.from_http_rule(rule))
            mappings.extend(cls.from_http_rule(b) for b in rule.additional_bindings)
        return mappings

    def is_empty(self) -> bool:
        return self.path == ""

    def path_params(self) -> List[str]:
        """Top-level field names bound by the path template."""
        params = []
        for match in _PLACEHOLDER.finditer(self.path):
            name = match.group(1).strip().split(".", 1)[0]
            if name not in params:
                params.append(name)
        return params

    def placement_for(self, field_name: str) -> Placement:
        if field_name in self.path_params():
            return Placement.PATH
        if self.body == "*" or self.body == field_name:
            return Placement.BODY
        if self.body:
            return Placement.QUERY
        if self.method in _QUERY_VERBS:
            return Placement.QUERY
        return Placement.BODY

    def apply_to(self, message: Message) -> None:
        """Annotate the fields of ``message`` with their REST placement.

        Placements are overwritten, not accumulated, so applying the same
        mapping again leaves the message unchanged.
        """
        for field in message.fields:
            field.rest_placement = self.placement_for(field.name)
