"""
Tests for article extraction and embed detection
"""

from pagesweep.extraction import extract_article
from pagesweep.extraction.article_extractor import detect_embed_type, get_dimension, iframe_source
from pagesweep.extraction.html_utils import parse_html

ARTICLE_PAGE = """
<html><head>
<meta property="og:title" content="OG Title">
<link rel="canonical" href="https://www.shop.eu/a/42/clean">
</head><body>
<h1 class="faqTitle">How to clean crystal</h1>
<div class="userHTMLContent faqAnswer">
<p>Use a soft cloth.</p>
<script>track()</script>
<iframe data-privacy-src="https://www.youtube-nocookie.com/embed/abc" src="about:blank" style="width: 560px; height:315px"></iframe>
<iframe src="https://player.vimeo.com/video/1" width="640" height="50%"></iframe>
<iframe></iframe>
</div>
</body></html>
"""


def _iframe(markup):
    return parse_html(markup).find('iframe')


class TestExtractArticle:
    def test_title_and_url(self):
        article = extract_article(ARTICLE_PAGE, "https://www.shop.eu/a/42/clean/")
        assert article.title == "How to clean crystal"
        assert article.url == "https://www.shop.eu/a/42/clean"
        assert article.scraped_at

    def test_body(self):
        article = extract_article(ARTICLE_PAGE, "https://www.shop.eu/a/42/clean")
        assert article.content_text == "Use a soft cloth."
        assert "<p>Use a soft cloth.</p>" in article.content_html
        assert "track()" not in article.content_html

    def test_embeds(self):
        embeds = extract_article(ARTICLE_PAGE, "https://www.shop.eu/a/42/clean").embeds

        assert [e.to_dict() for e in embeds] == [
            {'type': 'youtube', 'src': "https://www.youtube-nocookie.com/embed/abc",
             'width': "560px", 'height': "315px"},
            {'type': 'iframe', 'src': "https://player.vimeo.com/video/1",
             'width': "640px", 'height': "50%"},
            {'type': 'unknown', 'src': ""},
        ]

    def test_title_falls_back_to_og_title_then_h1(self):
        html = '<meta property="og:title" content="OG Title"><h1>Plain</h1><article>x</article>'
        assert extract_article(html, "https://a.com/a/1/").title == "OG Title"
        assert extract_article("<h1>Plain</h1>", "https://a.com/a/1/").title == "Plain"

    def test_no_body(self):
        article = extract_article("<h1>Only a title</h1>", "https://a.com/a/1/")
        assert article.url == "https://a.com/a/1/"
        assert article.content_html == ""
        assert article.content_text == ""
        assert article.embeds == []


class TestEmbedHelpers:
    def test_source_attribute_order(self):
        assert iframe_source(_iframe('<iframe src="a" data-src="b"></iframe>')) == "a"
        assert iframe_source(_iframe('<iframe data-src="b"></iframe>')) == "b"
        assert iframe_source(_iframe('<iframe data-privacy-src=" " src="a"></iframe>')) == "a"

    def test_detect_embed_type(self):
        assert detect_embed_type("https://www.youtube.com/embed/x") == "youtube"
        assert detect_embed_type("https://maps.google.com/") == "iframe"
        assert detect_embed_type("") == "unknown"

    def test_dimension_style_wins(self):
        iframe = _iframe('<iframe style="max-width: 100%; width: 300px" width="640"></iframe>')
        assert get_dimension(iframe, 'width') == "300px"

    def test_dimension_attribute(self):
        iframe = _iframe('<iframe width="640" height="auto"></iframe>')
        assert get_dimension(iframe, 'width') == "640px"
        assert get_dimension(iframe, 'height') == "auto"

    def test_dimension_missing(self):
        assert get_dimension(_iframe('<iframe></iframe>'), 'width') is None
