import logging
from typing import Dict, Optional, Tuple

from rpcdocs.extract.context import TypeRegistry, type_key
from rpcdocs.schema import Enum, Message

logger = logging.getLogger(__name__)

MAX_NESTED_DEPTH = 10


class NestedTypeResolver:
    """Collects every message and enum reachable from a starting message.

    The result maps double as the visited set. A message is only walked
    again when it is reached with more depth left than before, which bounds
    the walk and breaks reference cycles. Enums are leaves. Descent stops
    quietly once ``max_depth`` levels were walked.
    """

    def __init__(self, registry: TypeRegistry, max_depth: int = MAX_NESTED_DEPTH):
        self.registry = registry
        self.max_depth = max_depth

    def resolve(self, root: Message) -> Tuple[Dict[str, Message], Dict[str, Enum]]:
        """Return the (messages, enums) reachable from ``root``, keyed by full name."""
        messages: Dict[str, Message] = {}
        enums: Dict[str, Enum] = {}
        self.collect(root, messages, enums)
        return messages, enums

    def collect(
        self,
        message: Message,
        messages: Dict[str, Message],
        enums: Dict[str, Enum],
        depth: Optional[int] = None,
        walked: Optional[Dict[str, int]] = None,
    ) -> None:
        if depth is None:
            depth = self.max_depth
        if walked is None:
            walked = {}
        if depth <= 0:
            logger.debug("nested type depth limit reached at %s", message.full_name)
            return

        for field in message.fields:
            if not field.is_reference:
                continue
            key = type_key(field.full_type)
            if key in enums:
                continue

            if key not in messages:
                resolved = self.registry.resolve(key)
                if not isinstance(resolved, Message):
                    enums[key] = resolved
                    continue
                messages[key] = resolved

            # A message first reached near the limit is walked again when a
            # shorter path reaches it, so the result does not depend on field order.
            remaining = depth - 1
            if walked.get(key, -1) >= remaining:
                continue
            walked[key] = remaining
            self.collect(messages[key], messages, enums, remaining, walked)
