from typing import Sequence

from practice_cards.model import Card, CodeBlock, ListBlock, TableBlock, TextBlock


def _table_row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def render_card_markdown(card: Card) -> str:
    lines = [f"## {card.question}", ""]
    meta = f"{card.id} · {card.topic or 'General'} · {card.source}"
    if card.is_index:
        meta += " · index"
    lines += [f"_{meta}_", ""]

    for block in card.answer:
        if isinstance(block, TextBlock):
            lines.append(block.content)
        elif isinstance(block, CodeBlock):
            if block.code_type != "neutral":
                lines.append(f"{block.code_type.capitalize()} example:")
            lines += [f"```{block.language}", block.code, "```"]
        elif isinstance(block, ListBlock):
            lines += [f"- {item}" for item in block.items]
        elif isinstance(block, TableBlock):
            lines.append(_table_row(block.headers))
            lines.append(_table_row(["---"] * len(block.headers)))
            lines += [_table_row(row) for row in block.rows]
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
