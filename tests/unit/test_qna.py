"""Tests for QnA pair building."""

from lucore.core import ir


class TestQnaPairs:
    def test_pair(self, parse_lu) -> None:
        content = parse_lu("# ? hours\n- opening times\n```\n  9 to 5  \n```\n")
        [pair] = content.qna.qna_list
        assert pair.id == 0
        assert pair.answer == "9 to 5"
        assert pair.source == ir.QNA_SOURCE
        assert pair.questions == ["hours", "opening times"]
        assert pair.metadata == []

    def test_filters_become_metadata(self, parse_lu) -> None:
        content = parse_lu(
            "# ? hours\n**Filters:**\n- store = downtown\n- day = monday\n```\n9 to 5\n```\n"
        )
        [pair] = content.qna.qna_list
        assert [(m.name, m.value) for m in pair.metadata] == [
            ("store", "downtown"),
            ("day", "monday"),
        ]

    def test_pairs_keep_source_order(self, parse_lu) -> None:
        content = parse_lu("# ? a\n```\n1\n```\n# ? b\n```\n2\n```\n")
        assert [p.answer for p in content.qna.qna_list] == ["1", "2"]
        assert content.qna.to_dict()["qnaList"][1]["questions"] == ["b"]
