"""Tests for card location and tokenization."""

from climascrape.extract.blocks import (
    block_tokens,
    find_scope,
    locate_blocks,
    normalize_token,
    parse_document,
)


class TestNormalizeToken:
    def test_collapses_whitespace(self):
        assert normalize_token("  Sol \n\t com   nuvens ") == "Sol com nuvens"

    def test_blank(self):
        assert normalize_token(" \n ") == ""


class TestFindScope:
    def test_section_with_markers(self):
        soup = parse_document(
            "<div><span>Fora 20°</span></div>"
            "<section id='s'><h2>Previsão do Tempo - 15 Dias</h2></section>"
        )
        scope = find_scope(soup)
        assert scope.name == "section"
        assert scope["id"] == "s"

    def test_markers_split_across_nodes_do_not_count(self):
        soup = parse_document(
            "<section><h2>Previsão do Tempo</h2><p>15 Dias</p></section>"
        )
        assert find_scope(soup) is soup

    def test_falls_back_to_document(self):
        soup = parse_document("<div>Sol 20°</div>")
        assert find_scope(soup) is soup

    def test_first_matching_section_wins(self):
        soup = parse_document(
            "<section id='outer'><section id='inner'>"
            "<h2>Previsão do Tempo 15 Dias</h2></section></section>"
        )
        assert find_scope(soup)["id"] == "outer"


class TestBlockTokens:
    def test_document_order_and_empties_dropped(self):
        soup = parse_document(
            "<div><span> Seg </span>\n<span>12</span><!-- 99 --><b>28°</b></div>"
        )
        assert block_tokens(soup.div) == ["Seg", "12", "28°"]


class TestLocateBlocks:
    def test_only_degree_holders_selected(self):
        soup = parse_document(
            "<div id='a'><span>Sol</span><span>20°</span></div>"
            "<div id='b'><span>Sem temperatura</span></div>"
        )
        assert locate_blocks(soup) == [["Sol", "20°"]]

    def test_nested_candidates_kept(self):
        soup = parse_document(
            "<article><span>Seg</span><div><span>19°</span><span>28°</span></div></article>"
        )
        assert locate_blocks(soup) == [["Seg", "19°", "28°"], ["19°", "28°"]]

    def test_scope_excludes_outside_cards(self, page_html: str):
        blocks = locate_blocks(parse_document(page_html))
        assert blocks
        assert not any("Hoje" in b for b in blocks)

    def test_no_degree_anywhere(self):
        soup = parse_document("<html><body><div>Sem dados</div></body></html>")
        assert locate_blocks(soup) == []
