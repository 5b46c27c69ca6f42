import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from loguru import logger

from practice_cards.constants import DEFAULT_CATEGORY, DEFAULT_CODE_LANGUAGE
from practice_cards.model import (
    AnswerBlock,
    CodeBlock,
    ExtractedCard,
    ListBlock,
    TableBlock,
    TextBlock,
)

_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"\*(.+?)\*")
_INLINE_CODE = re.compile(r"`(.+?)`")
_LINK = re.compile(r"\[(.+?)\]\(.+?\)")

_LINE_BREAK = re.compile(r"\r?\n")
_FENCE = re.compile(r"^```(\w+)?")
_QUESTION = re.compile(r"^\*\*Q:\s*(.+?)\*\*$")
_ANSWER = re.compile(r"^A:\s*(.+)")
_SUBHEADING = re.compile(r"^#{3,4}\s+(.+)")
_SECTION_HEADING = re.compile(r"^##\s+(.+)")
_ANY_HEADING = re.compile(r"^#{1,6}\s+(.+)")
_TABLE_ROW = re.compile(r"^\s*\|(.+)\|\s*$")
_TABLE_SEPARATOR = re.compile(r"^\s*\|[\s:-]+\|")
_LIST_ITEM = re.compile(r"^\s*(?:[-*]|\d+\.)\s+(.+)")
_RULE = re.compile(r"^---+$")

_CODE_TYPE_LOOKBEHIND = 5


def clean_markdown(text: str) -> str:
    text = _BOLD.sub(r"\1", text)
    text = _ITALIC.sub(r"\1", text)
    text = _INLINE_CODE.sub(r"\1", text)
    text = _LINK.sub(r"\1", text)
    return text.strip()


def format_topic_label(raw_topic: str) -> str:
    label = re.sub(r"[-_]+", " ", raw_topic)
    label = re.sub(r"\s+", " ", label).strip()
    return re.sub(r"\b\w", lambda match: match.group(0).upper(), label, flags=re.ASCII)


def slugify_topic(raw_topic: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", raw_topic.lower())
    return slug.strip("-")


@dataclass(frozen=True)
class TopicInfo:
    source: str
    topic_id: str
    topic: str


@dataclass
class _AnswerBuilder:
    """Accumulates answer blocks while the extractor walks a file line by line."""

    blocks: List[AnswerBlock] = field(default_factory=list)
    paragraph: List[str] = field(default_factory=list)
    list_items: List[str] = field(default_factory=list)
    in_list: bool = False
    in_table: bool = False
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    def flush_paragraph(self) -> None:
        if self.paragraph:
            self.blocks.append(TextBlock(content=clean_markdown(" ".join(self.paragraph))))
            self.paragraph = []

    def flush_list(self) -> None:
        if self.list_items:
            self.blocks.append(
                ListBlock(items=[clean_markdown(item) for item in self.list_items])
            )
            self.list_items = []
        self.in_list = False

    def flush_table(self) -> None:
        if self.in_table and self.headers and self.rows:
            self.blocks.append(TableBlock(headers=self.headers, rows=self.rows))
        self.in_table = False
        self.headers = []
        self.rows = []

    def flush(self) -> None:
        self.flush_paragraph()
        self.flush_list()
        self.flush_table()


def _detect_code_type(lines: List[str], fence_index: int) -> Optional[str]:
    start = max(0, fence_index - _CODE_TYPE_LOOKBEHIND)
    for previous in reversed(lines[start:fence_index]):
        previous = previous.strip().lower()
        if "❌" in previous or "bad example" in previous:
            return "bad"
        if "✅" in previous or "good example" in previous:
            return "good"
    return None


def _table_cells(row: str) -> List[str]:
    return [clean_markdown(cell.strip()) for cell in row.split("|")]


class CardExtractionService:
    """
    Turns practice Markdown into cards.

    A card starts at a ``**Q: ...**`` line and collects everything up to the next
    question or ``##`` section heading: ``A:`` paragraphs, lists, tables and
    fenced code blocks.
    """

    def __init__(
        self,
        root_dir: Path,
        category: str = DEFAULT_CATEGORY,
        default_code_language: str = DEFAULT_CODE_LANGUAGE,
    ):
        self.root_dir = root_dir
        self.category = category
        self.default_code_language = default_code_language

    def topic_info(self, source_path: Path) -> TopicInfo:
        source = source_path.relative_to(self.root_dir).as_posix()
        stem = Path(source).stem
        return TopicInfo(
            source=source,
            topic_id=slugify_topic(stem) or "general",
            topic=format_topic_label(stem or "General"),
        )

    def extract_qa(self, markdown: str, source_path: Path) -> List[ExtractedCard]:
        info = self.topic_info(source_path)
        lines = _LINE_BREAK.split(markdown)
        cards: List[ExtractedCard] = []

        question: Optional[str] = None
        answer = _AnswerBuilder()
        in_code = False
        code_language = ""
        code_type: Optional[str] = None
        code_lines: List[str] = []

        def emit() -> None:
            answer.flush()
            if question and answer.blocks:
                cards.append(
                    ExtractedCard(
                        question=question,
                        answer=answer.blocks,
                        category=self.category,
                        topic=info.topic,
                        topic_id=info.topic_id,
                        source=info.source,
                    )
                )

        for index, line in enumerate(lines):
            fence = _FENCE.match(line)
            if fence:
                if not in_code:
                    answer.flush()
                    in_code = True
                    code_language = fence.group(1) or ""
                    code_lines = []
                    code_type = _detect_code_type(lines, index)
                else:
                    if question and code_lines:
                        answer.blocks.append(
                            CodeBlock(
                                language=code_language or self.default_code_language,
                                code="\n".join(code_lines),
                                code_type=code_type or "neutral",
                            )
                        )
                    in_code = False
                    code_lines = []
                    code_type = None
                continue

            if in_code:
                code_lines.append(line)
                continue

            question_match = _QUESTION.match(line)
            if question_match:
                emit()
                question = clean_markdown(question_match.group(1))
                answer = _AnswerBuilder()
                continue

            if question is None:
                continue

            if _SECTION_HEADING.match(line):
                emit()
                question = None
                answer = _AnswerBuilder()
                continue

            answer_match = _ANSWER.match(line)
            if answer_match:
                answer.flush()
                answer.paragraph.append(answer_match.group(1))
                continue

            if not line.strip():
                answer.flush()
                continue

            subheading = _SUBHEADING.match(line)
            if subheading:
                answer.flush()
                answer.paragraph.append(subheading.group(1))
                continue

            table_row = _TABLE_ROW.match(line)
            if table_row:
                if not answer.in_table:
                    answer.flush_paragraph()
                    answer.flush_list()
                    answer.in_table = True
                    answer.headers = _table_cells(table_row.group(1))
                    answer.rows = []
                elif not _TABLE_SEPARATOR.match(line):
                    answer.rows.append(_table_cells(table_row.group(1)))
                continue
            if answer.in_table:
                answer.flush_table()

            list_item = _LIST_ITEM.match(line)
            if list_item:
                if not answer.in_list:
                    answer.flush_paragraph()
                    answer.in_list = True
                    answer.list_items = []
                answer.list_items.append(list_item.group(1))
                continue
            if answer.in_list and not _RULE.match(line):
                answer.list_items[-1] += " " + line.strip()
                continue
            if answer.in_list:
                answer.flush_list()

            if not _RULE.match(line) and not line.startswith("💡"):
                answer.paragraph.append(line)

        emit()
        logger.debug(f"Extracted {len(cards)} Q&A cards from {info.source}")
        return cards

    def extract_index_overview(
        self,
        markdown: str,
        source_path: Path,
        topic: str = "Practice Index",
        topic_id: str = "practice-index",
        question: Optional[str] = None,
        fallback_question: str = "Practice Index",
    ) -> Optional[ExtractedCard]:
        """
        Build the single overview card for a practice index page.

        The first heading becomes the question unless one is given, every later
        heading becomes a text block. Code blocks are left out.
        """
        answer = _AnswerBuilder()
        in_code = False

        for line in _LINE_BREAK.split(markdown):
            if line.startswith("```"):
                answer.flush()
                in_code = not in_code
                continue

            if in_code:
                continue

            if _RULE.match(line):
                answer.flush()
                continue

            heading = _ANY_HEADING.match(line)
            if heading:
                answer.flush()
                heading_text = clean_markdown(heading.group(1))
                if question is None:
                    question = heading_text
                else:
                    answer.blocks.append(TextBlock(content=heading_text))
                continue

            list_item = _LIST_ITEM.match(line)
            if list_item:
                answer.flush_paragraph()
                answer.list_items.append(list_item.group(1))
                continue

            if not line.strip():
                answer.flush()
                continue

            answer.paragraph.append(line.strip())

        answer.flush()

        if not answer.blocks:
            return None

        return ExtractedCard(
            question=question or fallback_question,
            answer=answer.blocks,
            category=self.category,
            topic=topic,
            topic_id=topic_id,
            source=source_path.relative_to(self.root_dir).as_posix(),
            is_index=True,
        )
