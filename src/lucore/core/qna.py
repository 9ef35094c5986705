"""
Question and answer pairs.
"""

from . import ir
from .content import ParsedContent
from .resource import QnaSection


def to_qna_pair(section: QnaSection) -> ir.QnaPair:
    """Build a knowledge-base pair with the trimmed answer and filters as metadata."""
    return ir.QnaPair(
        id=0,
        answer=section.answer.strip(),
        source=ir.QNA_SOURCE,
        questions=list(section.questions),
        metadata=[ir.QnaMetadata(name=p.key, value=p.value) for p in section.filter_pairs],
    )


def handle_qnas(content: ParsedContent, sections: list[QnaSection]) -> None:
    for section in sections:
        content.qna.qna_list.append(to_qna_pair(section))
