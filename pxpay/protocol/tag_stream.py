"""
PxPay Tag Stream Reader

Reads values and attributes out of a gateway reply by slash-delimited
path, e.g. "Response/AuthCode".

The document is parsed once into a flat, ordered list of tag events
(open, close, or complete) each carrying its nesting level. Paths are
resolved by scanning that list one level per segment; no tree is kept.

Event 0 is a synthetic document root at level 0, closed by the last
event in the list. The document's real root element sits at level 1, so
every path starts with the root tag name. Index 0 doubles as the
"not found" result of a resolution.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pxpay.core.exceptions import PxPayParseError

logger = logging.getLogger(__name__)

NOT_FOUND = 0


class TagKind(Enum):
    """Kind of a tag event."""

    OPEN = "open"
    CLOSE = "close"
    COMPLETE = "complete"


@dataclass(frozen=True)
class TagEvent:
    """One entry of the flattened document."""

    level: int
    kind: TagKind
    tag: str
    value: Optional[str] = None
    attributes: Optional[Dict[str, str]] = None


class TagStream:
    """
    Path-addressable view over a parsed XML document.

    Read-only after construction, so one instance may be queried from
    several threads.

    Example:
        stream = TagStream('<Request valid="1"><URI>https://...</URI></Request>')
        stream.get_attribute("Request", "valid")   # "1"
        stream.get_value("Request/URI")            # "https://..."
    """

    def __init__(self, xml: str):
        """
        Parse the document.

        Raises:
            PxPayParseError: If the document is empty or not well-formed
        """
        if xml is None or not xml.strip():
            raise PxPayParseError("Empty document")

        try:
            root = ET.fromstring(xml)
        except ET.ParseError as e:
            line, column = e.position
            raise PxPayParseError(f"Malformed XML: {e}", line=line, column=column) from e

        events: List[TagEvent] = [TagEvent(level=0, kind=TagKind.OPEN, tag="")]
        self._flatten(root, 1, events)
        events.append(TagEvent(level=0, kind=TagKind.CLOSE, tag=""))
        self._events: Tuple[TagEvent, ...] = tuple(events)

        logger.debug(f"Parsed <{root.tag}> into {len(self._events)} tag events")

    @property
    def events(self) -> Tuple[TagEvent, ...]:
        return self._events

    def _flatten(self, element: ET.Element, level: int, events: List[TagEvent]) -> None:
        """Append the events for element and its descendants in document order."""
        attributes = dict(element.attrib) or None

        if len(element) == 0:
            events.append(
                TagEvent(
                    level=level,
                    kind=TagKind.COMPLETE,
                    tag=element.tag,
                    value=element.text or None,
                    attributes=attributes,
                )
            )
            return

        # Leading text of a container is only kept when it is not layout whitespace
        text = element.text if element.text and element.text.strip() else None
        events.append(
            TagEvent(level=level, kind=TagKind.OPEN, tag=element.tag, value=text, attributes=attributes)
        )
        for child in element:
            self._flatten(child, level + 1, events)
        events.append(TagEvent(level=level, kind=TagKind.CLOSE, tag=element.tag))

    def resolve(self, path: str, root_index: int = 0) -> int:
        """
        Resolve a path to the index of its event.

        Returns NOT_FOUND (0) if any segment has no match. When a parent has
        several children with the same tag, the first one is used.
        """
        head, sep, tail = path.partition("/")
        if sep:
            index = self.resolve(head, root_index)
            if index == NOT_FOUND:
                return NOT_FOUND
            return self.resolve(tail, index)

        root = self._events[root_index]
        if root.kind is TagKind.COMPLETE:
            return NOT_FOUND

        index = root_index + 1
        while index < len(self._events):
            event = self._events[index]
            if event.level == root.level and event.kind is TagKind.CLOSE:
                break
            if event.level == root.level + 1 and event.tag == path:
                return index
            index += 1
        return NOT_FOUND

    def get_value(self, path: str) -> Optional[str]:
        """Text of the element at path, or None if absent or empty."""
        index = self.resolve(path)
        if index == NOT_FOUND:
            return None
        return self._events[index].value

    def get_attribute(self, path: str, key: str) -> Optional[str]:
        """Attribute of the element at path, or None if either is missing."""
        index = self.resolve(path)
        if index == NOT_FOUND:
            return None
        attributes = self._events[index].attributes
        if not attributes:
            return None
        return attributes.get(key)
