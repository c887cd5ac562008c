"""Standard output rendering of dashboard cards."""

import json
import sys
from typing import Optional, TextIO

from ..logging.config import get_logger
from .cards import CardView


class StdoutCardRenderer:
    """Prints card views, either one per line or as a JSON document."""

    def __init__(self, format: str = "pretty", stream: Optional[TextIO] = None):
        if format not in ("pretty", "json"):
            raise ValueError(f"Unsupported format: {format}")
        self.format = format
        self.stream = stream or sys.stdout
        self.logger = get_logger("banca.render")

    def render(self, cards: dict[str, CardView]) -> None:
        output = self._format_cards(cards)
        print(output, file=self.stream, flush=True)
        self.logger.debug("Cards rendered", card_count=len(cards), format=self.format)

    def _format_cards(self, cards: dict[str, CardView]) -> str:
        if self.format == "json":
            return json.dumps([card.to_dict() for card in cards.values()], ensure_ascii=False)

        width = max((len(card_id) for card_id in cards), default=0)
        lines = []
        for card in cards.values():
            line = f"{card.element_id.ljust(width)}  {card.text}"
            if card.classes:
                line += f"  [{' '.join(card.classes)}]"
            lines.append(line)
        return "\n".join(lines)
