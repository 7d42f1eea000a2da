"""
Tests for product detail page extraction
"""

from pagesweep.extraction import extract_product, extract_product_result

SOURCE_URL = "https://www.shop.eu/p/77/chandelier/"

PRODUCT_PAGE = """
<html><head><link rel="canonical" href="https://www.shop.eu/p/77/chandelier"></head><body>
<ul class="breadcrumbs">
  <li><a href="/"><span itemprop="name">Home</span></a></li>
  <li><a href="/c/lights">Lights</a></li>
</ul>
<h1 itemprop="name">Crystal Chandelier</h1>
<div class="detailShort"> Short   text </div>
<div class="userHTMLContent ac-product__long-text"><p>Long text</p></div>
<div class="s1-detailGallery">
  <figure data-full="/img/1.jpg"></figure>
  <figure data-full="https://cdn.shop.eu/2.jpg"></figure>
  <figure></figure>
</div>
<p class="indicators"><span class="indicator">New</span><span class="indicator"> Sale </span></p>
<table class="tabAdditionalInfo">
  <tr><th>Category:</th><td><a href="/c/chandeliers">Chandeliers</a></td></tr>
  <tr><th>Diameter</th><td>60 cm</td></tr>
  <tr><th>Number of bulbs</th><td>8</td></tr>
  <tr><th>Shade Material</th><td>Crystal glass</td></tr>
  <tr><td>lonely cell</td></tr>
</table>
<div class="s1-buttonRows">
  <div class="s1-buttonRow">
    <div class="s1-buttonRow-val">Colour: <span class="s1-buttonRow-txt">Gold</span></div>
    <div class="s1-buttonRow-line">Art.No.: <span class="s1-buttonRow-txt">AC-1</span></div>
    <div class="price"><span class="priceCombTaxValueNumber">770 €</span></div>
    <div class="s1-buttonRow-wh" style="color: #228B22">In stock</div>
  </div>
  <div class="s1-buttonRow">
    <div class="s1-buttonRow-val">Colour: <span class="s1-buttonRow-txt">Silver</span></div>
    <div class="price"><span class="priceCombTaxValueNumber">1 250,00 €</span></div>
    <div class="s1-buttonRow-wh" style="color: #ff0000">In stock</div>
  </div>
</div>
</body></html>
"""


class TestExtractProduct:
    def test_basic_fields(self):
        product = extract_product(PRODUCT_PAGE, SOURCE_URL)

        assert product.name == "Crystal Chandelier"
        assert product.url == "https://www.shop.eu/p/77/chandelier"
        assert product.short_description == "Short text"
        assert product.long_description == "Long text"
        assert product.images == ["https://www.shop.eu/img/1.jpg", "https://cdn.shop.eu/2.jpg"]
        assert product.badges == ["New", "Sale"]

    def test_breadcrumb(self):
        product = extract_product(PRODUCT_PAGE, SOURCE_URL)
        assert [(b.title, b.url) for b in product.breadcrumb] == [
            ("Home", "https://www.shop.eu/"),
            ("Lights", "https://www.shop.eu/c/lights"),
        ]

    def test_parameters_and_category(self):
        product = extract_product(PRODUCT_PAGE, SOURCE_URL)

        assert product.parameters == {
            'diameter': "60 cm",
            'bulb_count': "8",
            'shade_material': "Crystal glass",
        }
        assert product.category.name == "Chandeliers"
        assert product.category.url == "https://www.shop.eu/c/chandeliers"

    def test_variants(self):
        gold, silver = extract_product(PRODUCT_PAGE, SOURCE_URL).variants

        assert gold.attributes == {'color': "Gold", 'art_no': "AC-1"}
        assert gold.price_incl_vat == "770 €"
        assert gold.price_excl_vat == "636.36"
        assert gold.in_stock is True
        assert gold.status_text == "In stock"

        assert silver.attributes == {'color': "Silver"}
        assert silver.price_excl_vat == "1033.06"
        # Stock comes from the indicator colour, not the text
        assert silver.in_stock is False

    def test_variant_to_dict_flattens_attributes(self):
        gold = extract_product(PRODUCT_PAGE, SOURCE_URL).variants[0]
        assert gold.to_dict() == {
            'color': "Gold",
            'art_no': "AC-1",
            'price_incl_vat': "770 €",
            'price_excl_vat': "636.36",
            'in_stock': True,
            'status_text': "In stock",
        }

    def test_fallback_variant_from_main_price(self):
        html = """
        <h1>Wall Lamp</h1>
        <div class="price"><span class="priceCombTaxValueNumber">500 €</span></div>
        """
        product = extract_product(html, "https://www.shop.eu/p/5/wall-lamp")

        assert product.name == "Wall Lamp"
        assert product.url == "https://www.shop.eu/p/5/wall-lamp"
        assert len(product.variants) == 1
        variant = product.variants[0]
        assert variant.attributes == {}
        assert variant.price_incl_vat == "500 €"
        assert variant.price_excl_vat == "413.22"
        assert variant.in_stock is False

    def test_no_price_no_variants(self):
        product = extract_product("<h1>Lamp</h1>", "https://www.shop.eu/p/6/lamp")
        assert product.variants == []
        assert product.category.name == ""
        assert product.parameters == {}


def test_scrape_result_wraps_product():
    result = extract_product_result(PRODUCT_PAGE, SOURCE_URL)

    assert result.source_url == SOURCE_URL
    assert result.scraped_at
    data = result.to_dict()
    assert data['product']['name'] == "Crystal Chandelier"
    assert data['product']['category'] == {'name': "Chandeliers", 'url': "https://www.shop.eu/c/chandeliers"}
    assert len(data['product']['variants']) == 2
