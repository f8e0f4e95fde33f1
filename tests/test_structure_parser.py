from bs4 import BeautifulSoup

import pytest

from ticketgen.parsing.structure_parser import StructureParser, parse_blocks


def _img(uri, attrs=""):
    return f'<img src="{uri}" {attrs}/>'


class TestBlockHeaders:

    @pytest.mark.parametrize("text", ["I BLOK", "II BLOK", "III BLOK", "IV BLOK", "V BLOK",
                                      "iblok", "ii Blok (nəzəri suallar)", "V   BLOK - 10 bal"])
    def test_headers(self, text):
        assert StructureParser().is_block_header(text)

    @pytest.mark.parametrize("text", ["VI BLOK", "BLOK I", "1 BLOK", "X BLOK", "Introduction", ""])
    def test_not_headers(self, text):
        assert not StructureParser().is_block_header(text)

    def test_header_text_is_block_name(self):
        blocks = parse_blocks("<p>  II BLOK (15 bal) </p><p>Question</p>")
        assert [b.name for b in blocks] == ["II BLOK (15 bal)"]

    def test_header_with_soft_line_break(self):
        blocks = parse_blocks("<p>I BLOK<br/>(10 bal)</p><p>Question</p>")
        assert [b.name for b in blocks] == ["I BLOK(10 bal)"]

    def test_content_before_first_header_is_ignored(self):
        html = "<p>Fənn: Verilənlər bazası</p><p>1. Orphan</p><p>I BLOK</p><p>Real question</p>"
        blocks = parse_blocks(html)
        assert len(blocks) == 1
        assert [q.text for q in blocks[0].questions] == ["Real question"]

    def test_header_first_element(self):
        blocks = parse_blocks("<h1>I BLOK</h1><p>Q</p>")
        assert blocks[0].name == "I BLOK"

    def test_duplicate_names_are_independent(self):
        html = "<p>I BLOK</p><p>A</p><p>I BLOK</p><p>B</p>"
        blocks = parse_blocks(html)
        assert [b.name for b in blocks] == ["I BLOK", "I BLOK"]
        assert [b.questions[0].text for b in blocks] == ["A", "B"]

    def test_empty_blocks_are_dropped(self):
        html = "<p>I BLOK</p><p>II BLOK</p><p>Q</p><p>III BLOK</p><p>   </p>"
        blocks = parse_blocks(html)
        assert [b.name for b in blocks] == ["II BLOK"]

    def test_no_headers(self):
        assert parse_blocks("<p>1. Question</p><p>2. Question</p>") == []


class TestTextElements:

    def test_paragraph_per_question(self):
        html = "<p>I BLOK</p><p>1. First</p><p>2. Second</p>"
        blocks = parse_blocks(html)
        assert [q.text for q in blocks[0].questions] == ["1. First", "2. Second"]
        assert all(q.images == [] for q in blocks[0].questions)

    def test_text_lines_are_segmented(self):
        html = "<p>I BLOK</p><p>1. First\ncontinues here\n2. Second</p>"
        blocks = parse_blocks(html)
        assert [q.text for q in blocks[0].questions] == ["1. First continues here", "2. Second"]

    def test_soft_line_break_keeps_one_question(self):
        html = "<p>I BLOK</p><p>What is normalization?<br/>Give an example.</p>"
        blocks = parse_blocks(html)
        assert [q.text for q in blocks[0].questions] == ["What is normalization?Give an example."]

    def test_soft_line_break_adds_no_text(self):
        soup = BeautifulSoup("<p>1. One<br/>2. Two<!-- note --></p>", "html.parser")
        assert StructureParser.element_text(soup.p) == "1. One2. Two"

    def test_unnumbered_lines_split_per_line(self):
        html = "<p>I BLOK</p><p>Alpha\nBeta\n\nGamma</p>"
        blocks = parse_blocks(html)
        assert [q.text for q in blocks[0].questions] == ["Alpha", "Beta", "Gamma"]

    def test_text_with_image_is_single_question(self, png_bytes, data_uri):
        uri = data_uri(png_bytes(10, 20))
        html = f"<p>I BLOK</p><p>1. Look at the figure\n2. not split {_img(uri)}</p>"
        blocks = parse_blocks(html)
        assert len(blocks[0].questions) == 1
        question = blocks[0].questions[0]
        assert question.text == "1. Look at the figure\n2. not split"
        assert len(question.images) == 1

    def test_bare_image_attaches_to_previous_question(self, png_bytes, gif_bytes, data_uri):
        html = (
            "<p>I BLOK</p>"
            "<p>1. Describe the diagram</p>"
            f"<p>{_img(data_uri(png_bytes(5, 5)))}</p>"
            f"<p>{_img(data_uri(gif_bytes(7, 3), 'image/gif'))}</p>"
            "<p>2. Next</p>"
        )
        questions = parse_blocks(html)[0].questions
        assert [q.text for q in questions] == ["1. Describe the diagram", "2. Next"]
        assert [img.content_type for img in questions[0].images] == ["image/png", "image/gif"]
        assert questions[1].images == []

    def test_bare_image_without_previous_question(self, png_bytes, data_uri):
        html = f"<p>I BLOK</p><p>{_img(data_uri(png_bytes(5, 5)))}</p><p>Text</p>"
        questions = parse_blocks(html)[0].questions
        assert questions[0].text == ""
        assert len(questions[0].images) == 1
        assert questions[1].text == "Text"

    def test_bare_image_does_not_cross_block_boundary(self, png_bytes, data_uri):
        html = f"<p>I BLOK</p><p>Q1</p><p>II BLOK</p><p>{_img(data_uri(png_bytes(5, 5)))}</p>"
        blocks = parse_blocks(html)
        assert blocks[0].questions[0].images == []
        assert blocks[1].questions[0].text == ""
        assert len(blocks[1].questions[0].images) == 1

    def test_external_images_are_skipped(self):
        html = '<p>I BLOK</p><p>Q1</p><p><img src="http://example.com/x.png"/></p><p><img/></p>'
        questions = parse_blocks(html)[0].questions
        assert len(questions) == 1
        assert questions[0].images == []

    def test_top_level_image_element(self, png_bytes, data_uri):
        html = f"<p>I BLOK</p><p>Q1</p>{_img(data_uri(png_bytes(9, 9)))}"
        questions = parse_blocks(html)[0].questions
        assert len(questions[0].images) == 1


class TestLists:

    def test_each_item_is_a_unit(self):
        html = "<p>I BLOK</p><ol><li>Define a key.</li><li>Define an index.</li><li>  </li></ol>"
        questions = parse_blocks(html)[0].questions
        assert [q.text for q in questions] == ["Define a key.", "Define an index."]

    def test_unordered_list(self):
        html = "<p>I BLOK</p><ul><li>A</li><li>B</li></ul>"
        assert [q.text for q in parse_blocks(html)[0].questions] == ["A", "B"]

    def test_item_text_is_segmented(self):
        html = "<p>I BLOK</p><ol><li>1. One\n2. Two</li></ol>"
        assert [q.text for q in parse_blocks(html)[0].questions] == ["1. One", "2. Two"]

    def test_list_item_with_png(self, png_bytes, data_uri):
        png = png_bytes(64, 48)
        html = f"<p>I BLOK</p><ol><li>Explain the chart {_img(data_uri(png))}</li></ol>"
        questions = parse_blocks(html)[0].questions

        assert len(questions) == 1
        question = questions[0]
        assert question.text == "Explain the chart"
        assert len(question.images) == 1
        image = question.images[0]
        assert image.content_type == "image/png"
        assert image.data == png
        assert (image.width, image.height) == (64, 48)

    def test_image_only_item_is_its_own_question(self, png_bytes, data_uri):
        html = f"<p>I BLOK</p><ol><li>Q</li><li>{_img(data_uri(png_bytes(3, 3)))}</li></ol>"
        questions = parse_blocks(html)[0].questions
        assert len(questions) == 2
        assert questions[1].text == ""
        assert len(questions[1].images) == 1

    def test_nested_list_belongs_to_parent_item(self, png_bytes, data_uri):
        html = (
            "<p>I BLOK</p><ol><li>Choose one:"
            f"<ul><li>option a {_img(data_uri(png_bytes(2, 2)))}</li><li>option b</li></ul>"
            "</li></ol>"
        )
        questions = parse_blocks(html)[0].questions
        assert len(questions) == 1
        assert questions[0].text == "Choose one:option a option b"
        assert len(questions[0].images) == 1

    def test_header_as_list_item_container(self):
        html = "<ol><li>I BLOK</li></ol><p>Q</p>"
        blocks = parse_blocks(html)
        assert blocks[0].name == "I BLOK"
        assert blocks[0].questions[0].text == "Q"


class TestImageSizeHints:

    def test_attribute_size_used_when_header_unknown(self, data_uri):
        uri = data_uri(b'\x01\x02\x03\x04', 'image/x-wmf')
        img = _img(uri, 'width="150" height="90"')
        html = f"<p>I BLOK</p><p>Q {img}</p>"
        image = parse_blocks(html)[0].questions[0].images[0]
        assert (image.width, image.height) == (150, 90)

    def test_style_size_used_when_header_unknown(self, data_uri):
        uri = data_uri(b'\x01\x02\x03\x04', 'image/x-wmf')
        img = _img(uri, 'style="width: 33px; height:44px"')
        html = f"<p>I BLOK</p><p>Q {img}</p>"
        image = parse_blocks(html)[0].questions[0].images[0]
        assert (image.width, image.height) == (33, 44)

    def test_header_dimensions_take_precedence(self, png_bytes, data_uri):
        uri = data_uri(png_bytes(20, 10))
        img = _img(uri, 'width="400" height="200"')
        html = f"<p>I BLOK</p><p>Q {img}</p>"
        image = parse_blocks(html)[0].questions[0].images[0]
        assert (image.width, image.height) == (20, 10)


class TestInvariants:

    def test_no_empty_questions_or_blocks(self, png_bytes, data_uri):
        html = (
            "<p>intro</p><p>I BLOK</p><p></p><ol><li></li><li>x</li></ol>"
            f"<p>{_img('http://nope')}</p><p>II BLOK</p><div><span> </span></div>"
            f"<p>III BLOK</p><p>{_img(data_uri(png_bytes(1, 1)))}</p><p>1. a\n\n2. b</p>"
        )
        blocks = parse_blocks(html)
        assert [b.name for b in blocks] == ["I BLOK", "III BLOK"]
        for block in blocks:
            assert block.questions
            for question in block.questions:
                assert not question.is_empty()

    def test_parser_accepts_full_document(self):
        soup = BeautifulSoup("<html><body><p>I BLOK</p><p>Q</p></body></html>", "html.parser")
        blocks = StructureParser().parse(soup)
        assert blocks[0].questions[0].text == "Q"

    def test_each_parse_is_independent(self):
        parser = StructureParser()
        first = parser.parse(BeautifulSoup("<p>I BLOK</p><p>A</p>", "html.parser"))
        second = parser.parse(BeautifulSoup("<p>Q</p>", "html.parser"))
        assert len(first) == 1
        assert second == []
